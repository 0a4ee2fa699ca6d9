from __future__ import annotations

import bcrypt

from stocktracker.contexts.identity.application.ports.password_hasher import PasswordHasher

BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_BCRYPT_ROUNDS = 10


class BcryptPasswordHasher(PasswordHasher):
    """
    BcryptPasswordHasher — bcrypt implementation of `PasswordHasher`.

    bcrypt ignores input past 72 bytes, so passwords are truncated explicitly
    before hashing and verification.

    Related:
      - src/stocktracker/contexts/identity/application/ports/password_hasher.py
      - apps/api/wiring/modules/identity.py
    """

    def __init__(self, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        """
        Initialize hasher with bcrypt cost factor.

        Args:
            rounds: bcrypt log2 cost, 4..31.
        Returns:
            None.
        Assumptions:
            Tests may use the minimum cost to stay fast.
        Raises:
            ValueError: If rounds is outside bcrypt bounds.
        Side Effects:
            None.
        """
        if rounds < 4 or rounds > 31:
            raise ValueError("BcryptPasswordHasher rounds must be within [4, 31]")
        self._rounds = rounds

    def hash_password(self, *, password: str) -> str:
        if not password:
            raise ValueError("BcryptPasswordHasher requires non-empty password")
        hashed = bcrypt.hashpw(_to_bcrypt_bytes(password), bcrypt.gensalt(rounds=self._rounds))
        return hashed.decode("utf-8")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(_to_bcrypt_bytes(password), password_hash.encode("utf-8"))
        except ValueError:
            # malformed stored hash
            return False


def _to_bcrypt_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
