from cinefind.errors import ValidationError
from cinefind.utils import is_email

MAX_DISPLAY_NAME_LENGTH = 64
# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def validate_email(email: str) -> None:
    if not is_email(email):
        raise ValidationError("Please enter a valid email address")


def validate_display_name(display_name: str) -> None:
    if not display_name.strip():
        raise ValidationError("Display name cannot be empty")

    if len(display_name) > MAX_DISPLAY_NAME_LENGTH:
        raise ValidationError(f"Display name must be at most {MAX_DISPLAY_NAME_LENGTH} characters long")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 2 characters
    - At most 72 bytes once UTF-8 encoded

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < 2:
        raise ValidationError("Password must be at least 2 characters long")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")
