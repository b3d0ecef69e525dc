"""core/security.py — Password hashing for user accounts (bcrypt)."""

from __future__ import annotations

import bcrypt

from core.config import settings


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
