"""Credential policies.

Only the identity and directory services talk to a policy, so moving from
plaintext secrets to hashes means picking a different policy here.
"""

from __future__ import annotations

from typing import Optional, Protocol

from werkzeug.security import check_password_hash, generate_password_hash


class CredentialPolicy(Protocol):
    def encode(self, password: str) -> str:
        """Turn a password into the secret stored in the credentials table."""

        raise NotImplementedError

    def verify(self, stored_secret: Optional[str], password: str) -> bool:
        raise NotImplementedError


class PlaintextCredentials:
    """Stores the password as-is and compares exact strings."""

    def encode(self, password: str) -> str:
        return password

    def verify(self, stored_secret: Optional[str], password: str) -> bool:
        return stored_secret is not None and stored_secret == password


class HashedCredentials:
    """werkzeug password hashes.

    Only verifies secrets written through this policy; the plaintext seed
    credentials do not match.
    """

    def encode(self, password: str) -> str:
        return generate_password_hash(password)

    def verify(self, stored_secret: Optional[str], password: str) -> bool:
        if not stored_secret:
            return False
        return check_password_hash(stored_secret, password)


def build_credential_policy(name: str) -> CredentialPolicy:
    key = (name or "plaintext").strip().lower()
    if key == "plaintext":
        return PlaintextCredentials()
    if key == "hashed":
        return HashedCredentials()
    raise ValueError(f"Unknown credential policy: {name!r}")
