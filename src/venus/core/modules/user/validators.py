from venus.errors import ValidationError


def validate_credentials(email: str, password: str) -> None:
    """Validate that both credentials are present.

    Email is expected to be normalized already, so a whitespace-only email
    counts as missing.

    Raises:
        ValidationError: If email or password is empty
    """
    if not email or not password:
        raise ValidationError("please enter an email and password.")
