from fastapi import APIRouter, Depends

from ..core.current_user import get_admin_account, get_desk
from ..core.desk import Desk
from ..schemas.account import AccountOut
from ..schemas.employee import EmployeeCreateIn, EmployeeOut, EmployeeUpdateIn
from ..schemas.entities import Account, Employee, Snapshot

router = APIRouter(prefix="/employees", tags=["employees"])


def serialize_employee(db: Snapshot, e: Employee) -> EmployeeOut:
    department = db.find_department(e.department_id)
    account = db.find_account(e.user_email)
    return EmployeeOut(
        employee_id=e.employee_id,
        user_email=e.user_email,
        position=e.position,
        department_id=e.department_id,
        hire_date=e.hire_date,
        department_name=department.name if department else None,
        account_name=account.full_name if account else None,
    )


@router.get("", response_model=list[EmployeeOut])
def list_employees(desk: Desk = Depends(get_desk), admin: Account = Depends(get_admin_account)):
    db = desk.store.snapshot
    return [serialize_employee(db, e) for e in desk.directory.list_employees(admin)]


@router.get("/candidates", response_model=list[AccountOut])
def employee_candidates(desk: Desk = Depends(get_desk), admin: Account = Depends(get_admin_account)):
    return desk.directory.employee_candidates(admin)


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(
    payload: EmployeeCreateIn,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    e = desk.directory.create_employee(
        admin,
        payload.employee_id,
        payload.user_email,
        payload.position,
        payload.department_id,
        payload.hire_date,
    )
    return serialize_employee(desk.store.snapshot, e)


@router.patch("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: str,
    payload: EmployeeUpdateIn,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    e = desk.directory.update_employee(
        admin,
        employee_id,
        payload.user_email,
        payload.position,
        payload.department_id,
        payload.hire_date,
    )
    return serialize_employee(desk.store.snapshot, e)


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: str,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    desk.directory.delete_employee(admin, employee_id)
    return {"status": "ok"}
