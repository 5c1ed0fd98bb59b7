"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hashing de passwords (Argon2id)

Responsabilidades:
    - Hashear passwords nuevas (registro, reset, invitación, cambio de email).
    - Verificar password vs hash almacenado: un mismatch o un hash corrupto
      es False, nunca una excepción.
    - Avisar cuando un hash fue generado con parámetros viejos, para que el
      login lo regenere.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        # VerifyMismatchError hereda de VerificationError.
        return False


def password_needs_rehash(password_hash: str) -> bool:
    """True si el hash usa parámetros distintos a los actuales del hasher."""
    try:
        return _hasher.check_needs_rehash(password_hash)
    except InvalidHashError:
        return True
