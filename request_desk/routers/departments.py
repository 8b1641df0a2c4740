from fastapi import APIRouter, Depends

from ..core.current_user import get_admin_account, get_desk
from ..core.desk import Desk
from ..schemas.department import DepartmentCreateIn, DepartmentOut, DepartmentUpdateIn
from ..schemas.entities import Account

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=list[DepartmentOut])
def list_departments(desk: Desk = Depends(get_desk), admin: Account = Depends(get_admin_account)):
    return [
        DepartmentOut(id=d.id, name=d.name, description=d.description, employee_count=count)
        for d, count in desk.directory.list_departments(admin)
    ]


@router.post("", response_model=DepartmentOut, status_code=201)
def create_department(
    payload: DepartmentCreateIn,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    d = desk.directory.create_department(admin, payload.name, payload.description)
    return DepartmentOut(id=d.id, name=d.name, description=d.description)


@router.patch("/{department_id}", response_model=DepartmentOut)
def update_department(
    department_id: int,
    payload: DepartmentUpdateIn,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    d = desk.directory.update_department(admin, department_id, payload.name, payload.description)
    count = len(desk.store.snapshot.employees_in_department(d.id))
    return DepartmentOut(id=d.id, name=d.name, description=d.description, employee_count=count)


@router.delete("/{department_id}")
def delete_department(
    department_id: int,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    desk.directory.delete_department(admin, department_id)
    return {"status": "ok"}
