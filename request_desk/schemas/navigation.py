from pydantic import BaseModel


class RouteOut(BaseModel):
    requested: str
    route: str
    access: str
    redirected: bool
    message: str | None = None
