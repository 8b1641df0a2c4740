from fastapi import APIRouter, Depends

from ..core.current_user import get_optional_account
from ..core.navigation import resolve_route
from ..schemas.entities import Account
from ..schemas.navigation import RouteOut

router = APIRouter(prefix="/navigate", tags=["navigation"])


def build_route_out(route: str, account: Account | None) -> RouteOut:
    decision = resolve_route(route, account)
    return RouteOut(
        requested=decision.requested,
        route=decision.route,
        access=decision.access,
        redirected=decision.redirected,
        message=decision.message,
    )


@router.get("", response_model=RouteOut)
def navigate_home(account: Account | None = Depends(get_optional_account)):
    return build_route_out("", account)


@router.get("/{route}", response_model=RouteOut)
def navigate(route: str, account: Account | None = Depends(get_optional_account)):
    return build_route_out(route, account)
