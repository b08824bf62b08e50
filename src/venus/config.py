from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "memory://"  # mongodb://host:port/dbname (dbname defaults to "venus"), or memory://
    host: str = "127.0.0.1"
    port: int = 5001
    debug: bool = False
    session_secret_key: str
    cookie_secure: bool = False  # Set to True in production with HTTPS
    bcrypt_rounds: int = 12
    cors_origins: list[str] = ["http://localhost:5173"]

    model_config = {
        "env_file": [".env"],
        "env_prefix": "VENUS_",
        "extra": "ignore",
    }
