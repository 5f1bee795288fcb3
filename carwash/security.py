import hashlib
import hmac
import secrets

PBKDF2_ROUNDS = 100_000


def _digest(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        PBKDF2_ROUNDS,
    ).hex()


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    return f"{salt}${_digest(password, salt)}"


def verify_password(plain_password: str, stored_password: str) -> bool:
    # Rows imported from the old dashboard hold plaintext passwords.
    if "$" not in stored_password:
        return hmac.compare_digest(plain_password, stored_password)

    salt, digest = stored_password.split("$", 1)
    return hmac.compare_digest(_digest(plain_password, salt), digest)
