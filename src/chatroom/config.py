from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "mongodb://localhost:27017/chatroom"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    base_url: str | None = None  # Public URL used in verification links, e.g. https://chat.example.com
    resend_api_key: str | None = None  # Resend API key; registration fails with a configuration error when unset
    email_from: str = "Chat App <noreply@yourdomain.com>"
    session_cookie_name: str = "auth_session"
    session_cookie_secure: bool = True
    session_ttl_days: int = 30
    verification_token_ttl_minutes: int = 60

    model_config = {
        "env_file": [".env"],
        "env_prefix": "CHATROOM_",
        "extra": "ignore",
    }
