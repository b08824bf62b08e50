"""Tests for registration and credential checks."""

from uuid import uuid4

import pytest

from venus.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError


class TestRegister:
    """Tests for UserService.register."""

    async def test_register_normalizes_email(self, services):
        """Test that email is trimmed and lowercased before storing."""
        user = await services.user.register("  Alice@Example.COM ", "secret")
        assert user.email == "alice@example.com"

    async def test_password_is_hashed(self, services):
        """Test that the plaintext password is never stored."""
        user = await services.user.register("alice@example.com", "secret")
        assert user.password_hash != "secret"
        assert user.password_hash.startswith("$2b$")

    async def test_duplicate_normalized_email_conflicts(self, services):
        """Test that emails differing only in case and whitespace collide."""
        await services.user.register("A@x.com", "secret")
        with pytest.raises(ConflictError, match="already has an account"):
            await services.user.register("a@x.com ", "other")

    @pytest.mark.parametrize(("email", "password"), [("", "secret"), ("   ", "secret"), ("a@x.com", "")])
    async def test_empty_fields_rejected(self, services, email, password):
        """Test that missing email or password is invalid input."""
        with pytest.raises(ValidationError, match="please enter an email and password"):
            await services.user.register(email, password)

    async def test_created_at_uses_core_clock(self, services, clock):
        user = await services.user.register("a@x.com", "secret")
        assert user.created_at == clock()


class TestAuthenticate:
    """Tests for UserService.authenticate."""

    async def test_register_then_authenticate(self, services):
        """Test that registered credentials authenticate the same user."""
        registered = await services.user.register("bob@example.com", "hunter2")
        user = await services.user.authenticate("bob@example.com", "hunter2")
        assert user.id == registered.id

    async def test_authenticate_normalizes_email(self, services):
        registered = await services.user.register("bob@example.com", "hunter2")
        user = await services.user.authenticate(" BOB@example.com", "hunter2")
        assert user.id == registered.id

    async def test_wrong_password_and_unknown_email_look_the_same(self, services):
        """Test that the error does not reveal which credential was wrong."""
        await services.user.register("bob@example.com", "hunter2")

        with pytest.raises(AuthenticationError) as wrong_password:
            await services.user.authenticate("bob@example.com", "wrong")
        with pytest.raises(AuthenticationError) as unknown_email:
            await services.user.authenticate("nobody@example.com", "hunter2")

        assert str(wrong_password.value) == str(unknown_email.value) == "email or password is wrong."

    async def test_empty_password_is_invalid_input(self, services):
        with pytest.raises(ValidationError):
            await services.user.authenticate("bob@example.com", "")


class TestGetUser:
    async def test_get_existing_user(self, services):
        registered = await services.user.register("c@x.com", "secret")
        assert (await services.user.get_user(registered.id)).email == "c@x.com"

    async def test_missing_user_raises(self, services):
        with pytest.raises(NotFoundError):
            await services.user.get_user(uuid4())
