from fastapi import APIRouter, Depends

from ..core.current_user import get_admin_account, get_desk
from ..core.desk import Desk
from ..schemas.account import (
    AccountCreateIn,
    AccountDeleteOut,
    AccountOut,
    AccountUpdateIn,
    PasswordResetIn,
)
from ..schemas.entities import Account

router = APIRouter(prefix="/admin/accounts", tags=["admin-accounts"])


@router.get("", response_model=list[AccountOut])
def list_accounts(desk: Desk = Depends(get_desk), admin: Account = Depends(get_admin_account)):
    return desk.accounts.list_accounts(admin)


@router.post("", response_model=AccountOut, status_code=201)
def create_account(
    payload: AccountCreateIn,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    return desk.accounts.create_account(
        admin,
        payload.first_name,
        payload.last_name,
        payload.email,
        payload.password,
        role=payload.role,
        verified=payload.verified,
    )


@router.patch("/{email}", response_model=AccountOut)
def update_account(
    email: str,
    payload: AccountUpdateIn,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    return desk.accounts.update_account(
        admin,
        email,
        payload.first_name,
        payload.last_name,
        payload.email,
        payload.password,
        payload.role,
        payload.verified,
    )


@router.post("/{email}/reset-password")
def reset_password(
    email: str,
    payload: PasswordResetIn,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    desk.accounts.reset_password(admin, email, payload.new_password, payload.confirm_password)
    return {"status": "ok"}


@router.delete("/{email}", response_model=AccountDeleteOut)
def delete_account(
    email: str,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    removed = desk.accounts.delete_account(admin, email)
    return AccountDeleteOut(employee_removed=removed)
