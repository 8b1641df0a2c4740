from fastapi import Depends, Request

from ..schemas.entities import Account
from .desk import Desk
from .errors import AuthenticationError
from .security import require_admin


def get_desk(request: Request) -> Desk:
    return request.app.state.desk


def get_optional_account(desk: Desk = Depends(get_desk)) -> Account | None:
    return desk.accounts.current_account()


def get_current_account(account: Account | None = Depends(get_optional_account)) -> Account:
    if not account:
        raise AuthenticationError(AuthenticationError.NOT_AUTHENTICATED, "Please log in to access this page")
    return account


def get_admin_account(account: Account = Depends(get_current_account)) -> Account:
    return require_admin(account)
