from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Optional


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    company: Optional[str] = None
    manager: Optional[str] = None
    # The bulk-import screen sends camelCase workType
    work_type: Optional[str] = Field(None, validation_alias=AliasChoices("work_type", "workType"))


class EmployeeResponse(BaseModel):
    id: int
    name: str
    username: str
    role: str
    company: Optional[str]
    manager: Optional[str]
    work_type: Optional[str]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: str
    password: str


class BulkImportRequest(BaseModel):
    # Items are validated one by one so a malformed row only fails itself
    employees: List[Dict[str, Any]]


class BulkImportError(BaseModel):
    employee: Optional[str]
    error: str


class BulkImportResponse(BaseModel):
    added: List[EmployeeResponse]
    errors: List[BulkImportError]
    count: int
