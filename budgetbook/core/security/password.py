from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(plaintext: str) -> str:
    """Returns a salted one-way hash suitable for storing in ``User.password_hash``."""
    return generate_password_hash(plaintext)


def check_password(plaintext: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, plaintext)
