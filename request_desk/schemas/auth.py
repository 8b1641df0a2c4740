from pydantic import BaseModel, Field


class RegisterIn(BaseModel):
    first_name: str = Field(alias="firstName", max_length=100)
    last_name: str = Field(alias="lastName", max_length=100)
    email: str = Field(max_length=254)
    password: str
    confirm_password: str = Field(alias="confirmPassword")

    class Config:
        populate_by_name = True


class LoginIn(BaseModel):
    email: str = ""
    password: str = ""


class VerifyEmailIn(BaseModel):
    email: str | None = None


class PendingVerificationOut(BaseModel):
    email: str | None = None
