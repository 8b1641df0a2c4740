from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging

from ..core.errors import ConflictError, DependentEntitiesError, NotFoundError, ValidationError
from ..core.security import require_admin
from ..core.store import Store
from ..schemas.entities import Account, Department, Employee, Snapshot, normalize_email

logger = logging.getLogger(__name__)

MIN_DEPARTMENT_NAME_LENGTH = 2


@dataclass
class EmployeeFields:
    user_email: str
    position: str
    department_id: int
    hire_date: date


def next_department_id(db: Snapshot) -> int:
    return max((d.id for d in db.departments), default=0) + 1


def check_department_fields(db: Snapshot, name: str | None, description: str | None, exclude_id: int | None = None) -> tuple[str, str]:
    name = (name or "").strip()
    description = (description or "").strip()
    if not name or not description:
        raise ValidationError("Please fill in all fields")
    if len(name) < MIN_DEPARTMENT_NAME_LENGTH:
        raise ValidationError(f"Department name must be at least {MIN_DEPARTMENT_NAME_LENGTH} characters")
    if db.find_department_by_name(name, exclude_id=exclude_id):
        raise ConflictError("Department name already exists")
    return name, description


def check_employee_fields(
    db: Snapshot,
    employee_id: str,
    user_email: str | None,
    position: str | None,
    department_id: int | None,
    hire_date: date | None,
    *,
    today: date,
    creating: bool = False,
) -> EmployeeFields:
    user_email = normalize_email(user_email)
    position = (position or "").strip()
    if not employee_id or not user_email or not position or department_id is None or hire_date is None:
        raise ValidationError("Please fill in all required fields")

    if not db.find_account(user_email):
        raise NotFoundError("User email does not exist. Please create an account first.")

    if creating and db.find_employee(employee_id):
        raise ConflictError("Employee ID already exists. Please use a different ID.")

    linked = db.employee_for_account(user_email)
    if linked and linked.employee_id != employee_id:
        raise ConflictError("This account is already linked to another employee")

    if not db.find_department(department_id):
        raise NotFoundError("Department not found")

    if hire_date > today:
        raise ValidationError("Hire date cannot be in the future")

    return EmployeeFields(
        user_email=user_email,
        position=position,
        department_id=department_id,
        hire_date=hire_date,
    )


class DirectoryService:
    """Department and employee records. Every operation requires an Admin."""

    def __init__(self, store: Store, today=date.today):
        self.store = store
        self._today = today

    # -- departments -----------------------------------------------------

    def list_departments(self, actor: Account) -> list[tuple[Department, int]]:
        require_admin(actor)
        db = self.store.snapshot
        return [(d, len(db.employees_in_department(d.id))) for d in db.departments]

    def create_department(self, actor: Account, name: str, description: str) -> Department:
        require_admin(actor)
        with self.store.transaction() as db:
            name, description = check_department_fields(db, name, description)
            department = Department(id=next_department_id(db), name=name, description=description)
            db.departments.append(department)
        logger.info("department created (id=%s, name=%s)", department.id, department.name)
        return department

    def update_department(self, actor: Account, department_id: int, name: str, description: str) -> Department:
        require_admin(actor)
        with self.store.transaction() as db:
            department = db.find_department(department_id)
            if not department:
                raise NotFoundError("Department not found")
            department.name, department.description = check_department_fields(
                db, name, description, exclude_id=department_id
            )
        return department

    def delete_department(self, actor: Account, department_id: int) -> None:
        require_admin(actor)
        with self.store.transaction() as db:
            if not db.find_department(department_id):
                raise NotFoundError("Department not found")
            dependents = db.employees_in_department(department_id)
            if dependents:
                raise DependentEntitiesError(
                    f"Department has {len(dependents)} employee(s) assigned and cannot be deleted",
                    count=len(dependents),
                )
            db.departments = [d for d in db.departments if d.id != department_id]
        logger.info("department deleted (id=%s)", department_id)

    # -- employees -------------------------------------------------------

    def list_employees(self, actor: Account) -> list[Employee]:
        require_admin(actor)
        return list(self.store.snapshot.employees)

    def employee_candidates(self, actor: Account) -> list[Account]:
        """Accounts offered for a new employee: not Admin, not already linked."""
        require_admin(actor)
        db = self.store.snapshot
        return [a for a in db.accounts if not a.is_admin and not db.employee_for_account(a.email)]

    def create_employee(
        self,
        actor: Account,
        employee_id: str,
        user_email: str,
        position: str,
        department_id: int | None,
        hire_date: date | None,
    ) -> Employee:
        require_admin(actor)
        employee_id = (employee_id or "").strip()
        with self.store.transaction() as db:
            fields = check_employee_fields(
                db,
                employee_id,
                user_email,
                position,
                department_id,
                hire_date,
                today=self._today(),
                creating=True,
            )
            employee = Employee(employee_id=employee_id, **vars(fields))
            db.employees.append(employee)
        logger.info("employee created (employee_id=%s, email=%s)", employee_id, fields.user_email)
        return employee

    def update_employee(
        self,
        actor: Account,
        employee_id: str,
        user_email: str,
        position: str,
        department_id: int | None,
        hire_date: date | None,
    ) -> Employee:
        require_admin(actor)
        with self.store.transaction() as db:
            employee = db.find_employee(employee_id)
            if not employee:
                raise NotFoundError("Employee not found")
            fields = check_employee_fields(
                db, employee_id, user_email, position, department_id, hire_date, today=self._today()
            )
            employee.user_email = fields.user_email
            employee.position = fields.position
            employee.department_id = fields.department_id
            employee.hire_date = fields.hire_date
        return employee

    def delete_employee(self, actor: Account, employee_id: str) -> None:
        require_admin(actor)
        with self.store.transaction() as db:
            if not db.find_employee(employee_id):
                raise NotFoundError("Employee not found")
            db.employees = [e for e in db.employees if e.employee_id != employee_id]
        logger.info("employee deleted (employee_id=%s)", employee_id)
