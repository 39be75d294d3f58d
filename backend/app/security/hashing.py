# backend/app/security/hashing.py
"""
Admin password hashing (bcrypt).

bcrypt only looks at the first 72 bytes of a secret; longer inputs are
cut to that limit explicitly so every bcrypt release treats them the same.
Length policy (8-128 chars) is enforced by the login schema, not here.
"""
import re
from typing import List, Optional

import bcrypt

from backend.app.core.config import settings

BCRYPT_MAX_BYTES = 72

SPECIAL_CHARACTERS = r'[!@#$%^&*(),.?":{}|<>]'


def _to_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_to_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Never raises: a mismatch or an unreadable hash are both just False."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_to_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def validate_password_strength(password: str) -> List[str]:
    """
    Check a new admin password against the site's policy.

    Returns:
        Message keys of the failed rules; empty when the password is acceptable
    """
    errors = []
    if len(password) < 8:
        errors.append("min_length")
    if not re.search(r"[A-Z]", password):
        errors.append("uppercase")
    if not re.search(r"[a-z]", password):
        errors.append("lowercase")
    if not re.search(r"[0-9]", password):
        errors.append("digit")
    if not re.search(SPECIAL_CHARACTERS, password):
        errors.append("special")
    return errors
