from pydantic import BaseModel, Field

from .entities import Role


class AccountOut(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    role: Role
    verified: bool

    class Config:
        from_attributes = True
        populate_by_name = True


class AccountCreateIn(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    password: str
    role: str = "User"
    verified: bool = False

    class Config:
        populate_by_name = True


class AccountUpdateIn(AccountCreateIn):
    pass


class AccountDeleteOut(BaseModel):
    status: str = "ok"
    employee_removed: bool = Field(alias="employeeRemoved")

    class Config:
        populate_by_name = True


class ProfileOut(AccountOut):
    employee_id: str | None = Field(default=None, alias="employeeId")
    position: str | None = None
    department_name: str | None = Field(default=None, alias="departmentName")


class ProfileUpdateIn(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")

    class Config:
        populate_by_name = True


class PasswordChangeIn(BaseModel):
    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(alias="newPassword")
    confirm_password: str = Field(alias="confirmPassword")

    class Config:
        populate_by_name = True


class PasswordResetIn(BaseModel):
    new_password: str = Field(alias="newPassword")
    confirm_password: str = Field(alias="confirmPassword")

    class Config:
        populate_by_name = True
