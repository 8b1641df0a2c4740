from __future__ import annotations

import logging

from ..core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..core.security import (
    SessionManager,
    authenticate,
    check_email,
    check_names,
    check_new_password,
    require_admin,
    verify_password,
)
from ..core.store import Store
from ..schemas.entities import ROLE_ADMIN, ROLE_USER, Account, normalize_email

logger = logging.getLogger(__name__)

ALLOWED_ROLES = {ROLE_ADMIN, ROLE_USER}


class AccountService:
    """Registration, sign-in, self-service profile and admin account management."""

    def __init__(self, store: Store, sessions: SessionManager):
        self.store = store
        self.sessions = sessions

    # -- session ---------------------------------------------------------

    def current_account(self) -> Account | None:
        return self.sessions.current(self.store.snapshot)

    def login(self, email: str, password: str) -> Account:
        try:
            account = authenticate(self.store.snapshot, email, password)
        except AuthenticationError as exc:
            if exc.reason == AuthenticationError.NOT_VERIFIED:
                self.sessions.set_pending_verification(email)
            raise
        self.sessions.login(account)
        logger.info("login succeeded (email=%s)", account.email)
        return account

    def logout(self) -> None:
        self.sessions.logout()

    # -- registration ----------------------------------------------------

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> Account:
        first_name, last_name = check_names(first_name, last_name)
        email = check_email(email)
        password = check_new_password(password)
        if password != confirm_password:
            raise ValidationError("Passwords do not match. Please try again.")

        with self.store.transaction() as db:
            if db.find_account(email):
                raise ConflictError("Email already registered. Please use a different email.")
            account = Account(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=password,
                role=ROLE_USER,
                verified=False,
            )
            db.accounts.append(account)

        self.sessions.set_pending_verification(email)
        logger.info("account registered (email=%s)", email)
        return account

    def pending_verification(self) -> str | None:
        return self.sessions.get_pending_verification()

    def verify_email(self, email: str | None = None) -> Account:
        email = normalize_email(email) or self.sessions.get_pending_verification()
        if not email:
            raise ValidationError("No email to verify")

        with self.store.transaction() as db:
            account = db.find_account(email)
            if not account:
                raise NotFoundError("Account not found")
            account.verified = True

        if self.sessions.get_pending_verification() == account.email:
            self.sessions.clear_pending_verification()
        return account

    # -- self service ----------------------------------------------------

    def update_profile(self, actor: Account, first_name: str, last_name: str) -> Account:
        first_name, last_name = check_names(first_name, last_name)
        with self.store.transaction() as db:
            account = db.find_account(actor.email)
            if not account:
                raise NotFoundError("Account not found")
            account.first_name = first_name
            account.last_name = last_name
        return account

    def change_password(
        self,
        actor: Account,
        current_password: str,
        new_password: str,
        confirm_password: str,
    ) -> None:
        with self.store.transaction() as db:
            account = db.find_account(actor.email)
            if not account:
                raise NotFoundError("Account not found")
            if not verify_password(current_password or "", account.password):
                raise AuthorizationError("Current password is incorrect")
            account.password = check_new_password(new_password, confirm_password)

    # -- admin -----------------------------------------------------------

    def list_accounts(self, actor: Account) -> list[Account]:
        require_admin(actor)
        return list(self.store.snapshot.accounts)

    def create_account(
        self,
        actor: Account,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: str = ROLE_USER,
        verified: bool = False,
    ) -> Account:
        require_admin(actor)
        first_name, last_name, email, password, role = self._check_account_fields(
            first_name, last_name, email, password, role
        )
        with self.store.transaction() as db:
            if db.find_account(email):
                raise ConflictError("Email already exists. Please use a different email.")
            account = Account(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=password,
                role=role,
                verified=verified,
            )
            db.accounts.append(account)
        logger.info("account created by admin (email=%s, role=%s)", email, role)
        return account

    def update_account(
        self,
        actor: Account,
        target_email: str,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: str,
        verified: bool,
    ) -> Account:
        require_admin(actor)
        target_email = normalize_email(target_email)
        first_name, last_name, email, password, role = self._check_account_fields(
            first_name, last_name, email, password, role
        )

        with self.store.transaction() as db:
            account = db.find_account(target_email)
            if not account:
                raise NotFoundError("Account not found")
            if email != target_email and db.find_account(email):
                raise ConflictError("Email already exists. Please use a different email.")
            if account.is_admin and role != ROLE_ADMIN and db.admin_count() <= 1:
                raise ConflictError("At least one Admin account must remain")

            if role == ROLE_ADMIN and not account.is_admin and db.employee_for_account(target_email):
                # Existing employee record is left as is.
                logger.info("account promoted to Admin while linked to an employee (email=%s)", target_email)

            if email != target_email:
                for employee in db.employees:
                    if employee.user_email == target_email:
                        employee.user_email = email
                for request in db.requests:
                    if request.employee_email == target_email:
                        request.employee_email = email

            account.first_name = first_name
            account.last_name = last_name
            account.email = email
            account.password = password
            account.role = role
            account.verified = verified

        if self.sessions.token == target_email:
            self.sessions.login(account)
        if email != target_email and self.sessions.get_pending_verification() == target_email:
            self.sessions.set_pending_verification(email)
        return account

    def reset_password(self, actor: Account, target_email: str, new_password: str, confirm_password: str) -> None:
        require_admin(actor)
        with self.store.transaction() as db:
            account = db.find_account(target_email)
            if not account:
                raise NotFoundError("Account not found")
            account.password = check_new_password(new_password, confirm_password)

    def delete_account(self, actor: Account, target_email: str) -> bool:
        """Delete an account and its employee record. Returns True if one was removed."""
        require_admin(actor)
        target_email = normalize_email(target_email)
        if target_email in (actor.email, self.sessions.token):
            raise AuthorizationError("Cannot delete your own account")

        with self.store.transaction() as db:
            if not db.find_account(target_email):
                raise NotFoundError("Account not found")
            had_employee = db.employee_for_account(target_email) is not None
            db.accounts = [a for a in db.accounts if a.email != target_email]
            db.employees = [e for e in db.employees if e.user_email != target_email]

        logger.info("account deleted (email=%s, employee_removed=%s)", target_email, had_employee)
        return had_employee

    @staticmethod
    def _check_account_fields(first_name, last_name, email, password, role):
        if not (first_name or "").strip() or not (last_name or "").strip() or not normalize_email(email) or not password:
            raise ValidationError("Please fill in all required fields")
        first_name, last_name = check_names(first_name, last_name)
        email = check_email(email)
        password = check_new_password(password)
        if role not in ALLOWED_ROLES:
            raise ValidationError("Invalid role")
        return first_name, last_name, email, password, role
