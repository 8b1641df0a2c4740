from __future__ import annotations

from dataclasses import dataclass

from ..schemas.entities import Account
from .security import ACCESS_ADMIN, ACCESS_AUTHENTICATED, ACCESS_NONE, authorize

HOME = "home"
LOGIN = "login"

ROUTES: dict[str, str] = {
    "home": ACCESS_NONE,
    "login": ACCESS_NONE,
    "register": ACCESS_NONE,
    "verify-email": ACCESS_NONE,
    "profile": ACCESS_AUTHENTICATED,
    "requests": ACCESS_AUTHENTICATED,
    "employees": ACCESS_ADMIN,
    "departments": ACCESS_ADMIN,
    "accounts": ACCESS_ADMIN,
    "all-requests": ACCESS_ADMIN,
}


@dataclass(frozen=True)
class RouteDecision:
    requested: str
    route: str
    access: str
    redirected: bool = False
    message: str | None = None


def resolve_route(name: str | None, account: Account | None) -> RouteDecision:
    requested = (name or "").strip().strip("#/") or HOME
    access = ROUTES.get(requested)
    if access is None:
        return RouteDecision(requested=requested, route=HOME, access=ACCESS_NONE, redirected=True)

    if access != ACCESS_NONE and account is None:
        return RouteDecision(
            requested=requested,
            route=LOGIN,
            access=access,
            redirected=True,
            message="Please log in to access this page",
        )
    if not authorize(account, access):
        return RouteDecision(
            requested=requested,
            route=HOME,
            access=access,
            redirected=True,
            message="Admin access required",
        )
    return RouteDecision(requested=requested, route=requested, access=access)
