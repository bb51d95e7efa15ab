"""
ThreadBoard Password Hashing

Argon2id password hashing and verification.
"""

import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

logger = logging.getLogger(__name__)


class PasswordManager:
    """
    One-way salted password hashing with Argon2id.

    The encoded hash carries its own salt and parameters, so only the
    hash string needs to be stored.
    """

    SALT_LENGTH = 16
    HASH_LENGTH = 32

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost_kb: int = 65536,
        parallelism: int = 1
    ):
        """
        Initialize password manager with Argon2id parameters.

        Args:
            time_cost: Number of iterations (higher = slower + more secure)
            memory_cost_kb: Memory usage in KB
            parallelism: Number of parallel lanes
        """
        self.time_cost = time_cost
        self.memory_cost_kb = memory_cost_kb
        self.parallelism = parallelism

        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost_kb,
            parallelism=parallelism,
            hash_len=self.HASH_LENGTH,
            salt_len=self.SALT_LENGTH,
            type=Type.ID
        )

        # Verified against when the username is unknown; built on first use.
        self._dummy_hash: str | None = None

        logger.debug(
            f"PasswordManager initialized: time={time_cost}, "
            f"memory={memory_cost_kb}KB, parallelism={parallelism}"
        )

    def hash_password(self, password: str) -> str:
        """
        Hash a password using Argon2id.

        Returns the full Argon2 hash string including parameters and salt.
        """
        return self._hasher.hash(password)

    def verify_password(self, password: str, hash_str: str) -> bool:
        """
        Verify a password against an Argon2id hash.

        Returns True if password matches, False otherwise (including for a
        malformed stored hash).
        """
        try:
            return self._hasher.verify(hash_str, password)
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError) as e:
            logger.warning(f"Password verification error: {e}")
            return False

    def burn_verify(self, password: str) -> bool:
        """Run a verification against a throwaway hash; always False."""
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("threadboard-dummy-password")
        self.verify_password(password, self._dummy_hash)
        return False
