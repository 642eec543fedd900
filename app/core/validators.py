import re

from app.core.errors import InvalidFormatError, MissingFieldError, ValidationError

USERNAME_RE = re.compile(r"^[a-zA-Z0-9._-]+$")
PASSWORD_RE = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@#^_()\[\]$!%*?&])[A-Za-z\d@#^_()\[\]$!%*?&]{6,}$"
)
MIN_PASSWORD_LENGTH = 6


def validate_username(username: str) -> None:
    if not username:
        raise MissingFieldError("Username is required")
    if len(username) < 6 or len(username) > 30:
        raise ValidationError("Username must be between 6 and 30 characters")
    if not USERNAME_RE.match(username):
        raise InvalidFormatError(
            "Username can only contain letters, numbers, dots, underscores, and hyphens"
        )


def validate_password(password: str) -> None:
    if not password:
        raise MissingFieldError("Password is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not PASSWORD_RE.match(password):
        raise ValidationError(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one number and one special character"
        )
