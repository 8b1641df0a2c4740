from datetime import date

from pydantic import BaseModel, Field


class EmployeeOut(BaseModel):
    employee_id: str = Field(alias="employeeId")
    user_email: str = Field(alias="userEmail")
    position: str
    department_id: int = Field(alias="departmentId")
    hire_date: date = Field(alias="hireDate")
    department_name: str | None = Field(default=None, alias="departmentName")
    account_name: str | None = Field(default=None, alias="accountName")

    class Config:
        populate_by_name = True


class EmployeeCreateIn(BaseModel):
    employee_id: str = Field(alias="employeeId", max_length=50)
    user_email: str = Field(alias="userEmail")
    position: str = ""
    department_id: int | None = Field(default=None, alias="departmentId")
    hire_date: date | None = Field(default=None, alias="hireDate")

    class Config:
        populate_by_name = True


class EmployeeUpdateIn(BaseModel):
    # employeeId is taken from the path and cannot change.
    user_email: str = Field(alias="userEmail")
    position: str = ""
    department_id: int | None = Field(default=None, alias="departmentId")
    hire_date: date | None = Field(default=None, alias="hireDate")

    class Config:
        populate_by_name = True
