from fastapi import APIRouter, Depends

from ..core.current_user import get_current_account, get_desk
from ..core.desk import Desk
from ..schemas.account import PasswordChangeIn, ProfileOut, ProfileUpdateIn
from ..schemas.entities import Account

router = APIRouter(prefix="/me", tags=["me"])


def build_profile(desk: Desk, account: Account) -> ProfileOut:
    db = desk.store.snapshot
    employee = db.employee_for_account(account.email)
    department = db.find_department(employee.department_id) if employee else None
    return ProfileOut(
        first_name=account.first_name,
        last_name=account.last_name,
        email=account.email,
        role=account.role,
        verified=account.verified,
        employee_id=employee.employee_id if employee else None,
        position=employee.position if employee else None,
        department_name=department.name if department else None,
    )


@router.get("", response_model=ProfileOut)
def me(desk: Desk = Depends(get_desk), account: Account = Depends(get_current_account)):
    return build_profile(desk, account)


@router.patch("", response_model=ProfileOut)
def update_profile(
    payload: ProfileUpdateIn,
    desk: Desk = Depends(get_desk),
    account: Account = Depends(get_current_account),
):
    updated = desk.accounts.update_profile(account, payload.first_name, payload.last_name)
    return build_profile(desk, updated)


@router.post("/password")
def change_password(
    payload: PasswordChangeIn,
    desk: Desk = Depends(get_desk),
    account: Account = Depends(get_current_account),
):
    desk.accounts.change_password(
        account,
        payload.current_password,
        payload.new_password,
        payload.confirm_password,
    )
    return {"status": "ok"}
