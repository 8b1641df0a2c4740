from __future__ import annotations

from typing import Callable
import hmac
import logging

from email_validator import validate_email, EmailNotValidError
from sqlalchemy.exc import SQLAlchemyError

from ..schemas.entities import Account, Snapshot, normalize_email
from .errors import AuthenticationError, AuthorizationError, ValidationError
from .kv_store import KeyValueStore
from .settings import settings

logger = logging.getLogger(__name__)

ACCESS_NONE = "none"
ACCESS_AUTHENTICATED = "authenticated"
ACCESS_ADMIN = "admin"

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def verify_password(pw: str, stored: str) -> bool:
    # Stored verbatim; no hashing.
    if stored is None:
        return False
    return hmac.compare_digest(pw.encode("utf-8"), stored.encode("utf-8"))


def authenticate(snapshot: Snapshot, email: str, password: str) -> Account:
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Please enter both email and password")

    account = snapshot.find_account(email)
    if not account:
        raise AuthenticationError(AuthenticationError.NOT_FOUND, "Account not found. Please register first.")
    if not account.verified:
        raise AuthenticationError(AuthenticationError.NOT_VERIFIED, "Email not verified.")
    if not verify_password(password, account.password):
        raise AuthenticationError(AuthenticationError.WRONG_PASSWORD, "Incorrect password. Please try again.")
    return account


def authorize(account: Account | None, required: str) -> bool:
    if required == ACCESS_NONE:
        return True
    if account is None:
        return False
    if required == ACCESS_AUTHENTICATED:
        return True
    return account.is_admin


def require_admin(account: Account | None) -> Account:
    if not authorize(account, ACCESS_ADMIN):
        raise AuthorizationError("Admin access required")
    return account


def check_email(email: str | None) -> str:
    email = normalize_email(email)
    if not email:
        raise ValidationError("Please enter a valid email address")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Please enter a valid email address")
    return email


def check_names(first_name: str | None, last_name: str | None) -> tuple[str, str]:
    first_name = (first_name or "").strip()
    last_name = (last_name or "").strip()
    if not first_name or not last_name:
        raise ValidationError("Please enter your full name")
    if len(first_name) < MIN_NAME_LENGTH or len(last_name) < MIN_NAME_LENGTH:
        raise ValidationError(f"Names must be at least {MIN_NAME_LENGTH} characters")
    return first_name, last_name


def check_new_password(password: str | None, confirm: str | None = None) -> str:
    password = password or ""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if confirm is not None and password != confirm:
        raise ValidationError("Passwords do not match")
    return password


class SessionManager:
    """The single persisted session plus the pending-verification marker.

    The token is the signed-in account's normalized email, stored apart from
    the data snapshot.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        session_key: str | None = None,
        pending_key: str | None = None,
        on_warning: Callable[[str], object] | None = None,
    ):
        self._kv = kv
        self._on_warning = on_warning
        self._session_key = session_key or settings.SESSION_KEY
        self._pending_key = pending_key or settings.PENDING_VERIFICATION_KEY
        self._token: str | None = None

    @property
    def token(self) -> str | None:
        return self._token

    def login(self, account: Account) -> str:
        self._token = account.email
        self._write(self._session_key, self._token)
        return self._token

    def logout(self) -> None:
        self._token = None
        self._clear(self._session_key)

    def restore(self, snapshot: Snapshot) -> Account | None:
        try:
            token = self._kv.get(self._session_key)
        except SQLAlchemyError as exc:
            logger.exception("failed to read session token")
            self._report(f"Error loading session ({type(exc).__name__})")
            return None
        if not token:
            return None
        account = snapshot.find_account(token)
        if account and account.verified:
            self._token = account.email
            return account
        self.logout()
        return None

    def current(self, snapshot: Snapshot) -> Account | None:
        if not self._token:
            return None
        account = snapshot.find_account(self._token)
        if not account:
            self.logout()
        return account

    def get_pending_verification(self) -> str | None:
        try:
            return self._kv.get(self._pending_key)
        except SQLAlchemyError as exc:
            logger.exception("failed to read pending verification marker")
            self._report(f"Error loading verification marker ({type(exc).__name__})")
            return None

    def set_pending_verification(self, email: str) -> None:
        self._write(self._pending_key, normalize_email(email))

    def clear_pending_verification(self) -> None:
        self._clear(self._pending_key)

    def _write(self, key: str, value: str) -> None:
        try:
            self._kv.set(key, value)
        except SQLAlchemyError as exc:
            logger.exception("failed to write %s", key)
            self._report(f"Error saving {key} ({type(exc).__name__})")

    def _clear(self, key: str) -> None:
        try:
            self._kv.remove(key)
        except SQLAlchemyError as exc:
            logger.exception("failed to clear %s", key)
            self._report(f"Error clearing {key} ({type(exc).__name__})")

    def _report(self, message: str) -> None:
        if self._on_warning:
            self._on_warning(message)
