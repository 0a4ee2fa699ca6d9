from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """
    PasswordHasher — one-way hashing port for account passwords.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/security/password/
        bcrypt_password_hasher.py
      - src/stocktracker/contexts/identity/application/use_cases/register_user.py
      - src/stocktracker/contexts/identity/application/use_cases/login_user.py
    """

    def hash_password(self, *, password: str) -> str:
        """
        Hash plaintext password with a per-call salt.

        Args:
            password: Plaintext account password.
        Returns:
            str: Self-describing hash string for storage.
        Assumptions:
            Plaintext is never logged or persisted.
        Raises:
            ValueError: If password is empty.
        Side Effects:
            None.
        """
        ...

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """
        Check plaintext password against stored hash.

        Args:
            password: Candidate plaintext password.
            password_hash: Stored hash from `hash_password`.
        Returns:
            bool: `True` on match; malformed hashes return `False`.
        Assumptions:
            Comparison is constant-time inside the hashing library.
        Raises:
            None.
        Side Effects:
            None.
        """
        ...
