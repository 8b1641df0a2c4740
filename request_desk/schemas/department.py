from pydantic import BaseModel, Field


class DepartmentOut(BaseModel):
    id: int
    name: str
    description: str
    employee_count: int = Field(default=0, alias="employeeCount")

    class Config:
        populate_by_name = True


class DepartmentCreateIn(BaseModel):
    name: str = Field(max_length=100)
    description: str = ""


class DepartmentUpdateIn(DepartmentCreateIn):
    pass
