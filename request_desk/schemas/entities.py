from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ROLE_ADMIN = "Admin"
ROLE_USER = "User"
Role = Literal["Admin", "User"]

STATUS_PENDING = "Pending"
STATUS_APPROVED = "Approved"
STATUS_REJECTED = "Rejected"
STATUS_CANCELLED = "Cancelled"
RequestStatus = Literal["Pending", "Approved", "Rejected", "Cancelled"]


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class Account(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    password: str
    role: Role = ROLE_USER
    verified: bool = False

    class Config:
        populate_by_name = True

    @field_validator("email")
    @classmethod
    def email_normalized(cls, v: str) -> str:
        return normalize_email(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class Department(BaseModel):
    id: int
    name: str
    description: str = ""


class Employee(BaseModel):
    employee_id: str = Field(alias="employeeId")
    user_email: str = Field(alias="userEmail")
    position: str
    department_id: int = Field(alias="departmentId")
    hire_date: dt.date = Field(alias="hireDate")

    class Config:
        populate_by_name = True

    @field_validator("user_email")
    @classmethod
    def user_email_normalized(cls, v: str) -> str:
        return normalize_email(v)


class RequestItem(BaseModel):
    name: str = Field(min_length=1)
    qty: int = Field(ge=1)


class Request(BaseModel):
    id: int
    type: str
    items: list[RequestItem] = Field(min_length=1)
    status: RequestStatus = STATUS_PENDING
    date: dt.date
    employee_email: str = Field(alias="employeeEmail")

    class Config:
        populate_by_name = True


class Snapshot(BaseModel):
    """Every collection the desk owns, as persisted under a single key."""

    accounts: list[Account] = Field(default_factory=list)
    departments: list[Department] = Field(default_factory=list)
    employees: list[Employee] = Field(default_factory=list)
    requests: list[Request] = Field(default_factory=list)

    def find_account(self, email: str | None) -> Account | None:
        email = normalize_email(email)
        return next((a for a in self.accounts if a.email == email), None)

    def find_department(self, department_id: int | None) -> Department | None:
        return next((d for d in self.departments if d.id == department_id), None)

    def find_department_by_name(self, name: str, exclude_id: int | None = None) -> Department | None:
        key = name.strip().lower()
        return next(
            (d for d in self.departments if d.name.lower() == key and d.id != exclude_id),
            None,
        )

    def find_employee(self, employee_id: str | None) -> Employee | None:
        return next((e for e in self.employees if e.employee_id == employee_id), None)

    def employee_for_account(self, email: str | None) -> Employee | None:
        email = normalize_email(email)
        return next((e for e in self.employees if e.user_email == email), None)

    def employees_in_department(self, department_id: int) -> list[Employee]:
        return [e for e in self.employees if e.department_id == department_id]

    def find_request(self, request_id: int) -> Request | None:
        return next((r for r in self.requests if r.id == request_id), None)

    def admin_count(self) -> int:
        return sum(1 for a in self.accounts if a.is_admin)
