from pydantic import BaseModel, Field


class RequestItemIn(BaseModel):
    name: str = ""
    qty: int | None = None


class RequestCreateIn(BaseModel):
    type: str
    items: list[RequestItemIn] = Field(default_factory=list)
