# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Salted one-way hashing with bcrypt.
#
# bcrypt only looks at the first 72 bytes of a password. Newer releases of the
# library raise instead of truncating, so the truncation is done here, the
# same way for hashing and for checking.
#
# Both functions are CPU bound; async callers should run them in a thread
# (asyncio.to_thread) so the event loop keeps serving other requests.
# =============================================================================

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a password with a fresh salt.

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor

    Returns:
        The bcrypt hash as text, ready to store in users.password_hash
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    Comparison is done by bcrypt.checkpw. A malformed stored hash counts as
    a mismatch.
    """
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
