from fastapi import APIRouter, Depends

from ..core.current_user import get_admin_account, get_current_account, get_desk
from ..core.desk import Desk
from ..schemas.entities import Account, Request
from ..schemas.request import RequestCreateIn

router = APIRouter(prefix="/requests", tags=["requests"])
admin_router = APIRouter(prefix="/admin/requests", tags=["admin-requests"])


@router.get("", response_model=list[Request])
def list_my_requests(desk: Desk = Depends(get_desk), account: Account = Depends(get_current_account)):
    return desk.workflow.list_mine(account.email)


@router.post("", response_model=Request, status_code=201)
def submit_request(
    payload: RequestCreateIn,
    desk: Desk = Depends(get_desk),
    account: Account = Depends(get_current_account),
):
    items = [item.model_dump() for item in payload.items]
    return desk.workflow.submit(account, payload.type, items)


@router.get("/{request_id}", response_model=Request)
def get_request(
    request_id: int,
    desk: Desk = Depends(get_desk),
    account: Account = Depends(get_current_account),
):
    return desk.workflow.get(request_id, account)


@router.post("/{request_id}/cancel", response_model=Request)
def cancel_request(
    request_id: int,
    desk: Desk = Depends(get_desk),
    account: Account = Depends(get_current_account),
):
    return desk.workflow.cancel(request_id, account)


@admin_router.get("", response_model=list[Request])
def list_all_requests(desk: Desk = Depends(get_desk), admin: Account = Depends(get_admin_account)):
    return desk.workflow.list_all(admin)


@admin_router.post("/{request_id}/approve", response_model=Request)
def approve_request(
    request_id: int,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    return desk.workflow.approve(request_id, admin)


@admin_router.post("/{request_id}/reject", response_model=Request)
def reject_request(
    request_id: int,
    desk: Desk = Depends(get_desk),
    admin: Account = Depends(get_admin_account),
):
    return desk.workflow.reject(request_id, admin)
