from chatroom.errors import ValidationError

MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookups."""
    return email.strip().lower()


def validate_credentials(email: str | None, password: str | None) -> tuple[str, str]:
    """Validate registration input.

    Requirements:
    - Both email and password present and non-empty
    - Password at least 8 characters long

    Returns:
        The normalized email and the password

    Raises:
        ValidationError: If the input doesn't meet requirements
    """
    if not email or not email.strip() or not password:
        raise ValidationError("Email and password are required")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    return normalize_email(email), password
