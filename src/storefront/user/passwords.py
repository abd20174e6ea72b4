"""bcrypt password hashing."""

import bcrypt
from protean.exceptions import ValidationError

from storefront.shared.settings import get_bcrypt_rounds

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": [f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"]})

    salt = bcrypt.gensalt(rounds=get_bcrypt_rounds())
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of a plaintext password against a stored hash."""
    if not password or not password_hash:
        return False
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
