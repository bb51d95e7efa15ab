"""
ThreadBoard Account Service

Registration, login and per-request session rehydration.
"""

import sqlite3
import logging
from enum import Enum
from typing import Any, Optional

from ..db.connection import Database
from ..db.models import User
from ..db.users import UserRepository
from .crypto import PasswordManager

logger = logging.getLogger(__name__)


class RegistrationStatus(Enum):
    """Outcome of a registration attempt."""
    CREATED = "created"
    MISSING_FIELDS = "missing_fields"
    DUPLICATE_EMAIL = "duplicate_email"
    DUPLICATE_USERNAME = "duplicate_username"
    FAILURE = "failure"


class AuthStatus(Enum):
    """Outcome of a login attempt."""
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    FAILURE = "failure"


class AccountService:
    """
    Credential store and authenticator.

    Passwords are hashed with Argon2id before they reach the database and
    verified in constant time on login.
    """

    def __init__(self, db: Database, passwords: PasswordManager):
        self.user_repo = UserRepository(db)
        self.passwords = passwords

    def email_exists(self, email: str) -> bool:
        """True iff a user with this email is registered."""
        return self.user_repo.email_exists(email)

    def register(
        self,
        username: str,
        email: str,
        password: str
    ) -> tuple[Optional[User], RegistrationStatus]:
        """
        Register a new user.

        The email check runs first so duplicates get a friendly answer; the
        unique constraints still decide the race between two concurrent
        registrations.

        Returns:
            (User, CREATED) on success
            (None, status) on failure
        """
        username = (username or "").strip()
        email = (email or "").strip()

        if not username or not email or not password:
            return None, RegistrationStatus.MISSING_FIELDS

        try:
            if self.user_repo.email_exists(email):
                logger.info(f"Registration refused, email in use: {email}")
                return None, RegistrationStatus.DUPLICATE_EMAIL

            password_hash = self.passwords.hash_password(password)
            user = self.user_repo.create_user(username, email, password_hash)

        except sqlite3.IntegrityError as e:
            status = self._integrity_status(e)
            logger.info(f"Registration refused for {username}: {status.value}")
            return None, status

        except sqlite3.Error:
            logger.exception(f"Registration failed for {username}")
            return None, RegistrationStatus.FAILURE

        logger.info(f"User registered: {username} (id={user.id})")
        return user, RegistrationStatus.CREATED

    def _integrity_status(self, error: sqlite3.IntegrityError) -> RegistrationStatus:
        """Map a unique constraint violation to a registration status."""
        text = str(error)
        if "users.email" in text:
            return RegistrationStatus.DUPLICATE_EMAIL
        if "users.username" in text:
            return RegistrationStatus.DUPLICATE_USERNAME
        return RegistrationStatus.FAILURE

    def authenticate(
        self,
        username: str,
        password: str
    ) -> tuple[Optional[User], AuthStatus]:
        """
        Check a username/password pair.

        An unknown username and a wrong password give the same status.

        Returns:
            (User, SUCCESS) on success
            (None, status) on failure
        """
        if not username or not password:
            return None, AuthStatus.INVALID_CREDENTIALS

        try:
            user = self.user_repo.get_user_by_username(username)
        except sqlite3.Error:
            logger.exception("User lookup failed during login")
            return None, AuthStatus.FAILURE

        if user is None:
            self.passwords.burn_verify(password)
            logger.info("Login failed: invalid credentials")
            return None, AuthStatus.INVALID_CREDENTIALS

        if not self.passwords.verify_password(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            return None, AuthStatus.INVALID_CREDENTIALS

        logger.info(f"User logged in: {user.username}")
        return user, AuthStatus.SUCCESS

    def resolve_session_user(self, raw_user_id: Any) -> Optional[User]:
        """
        Turn the user id stored in a session back into a User.

        Anything that does not lead to an existing user (malformed id,
        deleted user, database error) means the request is unauthenticated.
        """
        if raw_user_id is None or isinstance(raw_user_id, bool):
            return None

        try:
            user_id = int(raw_user_id)
        except (TypeError, ValueError):
            logger.warning(f"Malformed user id in session: {raw_user_id!r}")
            return None

        try:
            user = self.user_repo.get_user_by_id(user_id)
        except sqlite3.Error:
            logger.exception(f"Session user lookup failed for id={user_id}")
            return None

        if user is None:
            logger.warning(f"Session refers to missing user id={user_id}")
        return user

    def delete_user(self, username: str) -> tuple[bool, str]:
        """
        Delete a user by username; their messages are removed by cascade.

        Returns:
            (True, "") on success
            (False, error_message) on failure
        """
        user = self.user_repo.get_user_by_username(username)
        if not user:
            return False, f"User '{username}' not found."

        if not self.user_repo.delete_user(user.id):
            return False, f"Failed to delete user '{username}'."

        logger.info(f"User deleted: {username} (id={user.id})")
        return True, ""

    def list_users(self, limit: int = 100, offset: int = 0) -> list[User]:
        """List registered users in registration order."""
        return self.user_repo.list_users(limit=limit, offset=offset)
