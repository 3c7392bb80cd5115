from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, EmailStr

from garment_erp.core.models.user import UserRole
from garment_erp.core.schemas.common import DocumentResponse


class CreateUserRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    full_name: Optional[str] = None
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.USER


class UpdateUserRequest(BaseModel):
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserResponse(DocumentResponse):
    username: str
    email: str
    full_name: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None


class RolePermissionsResponse(BaseModel):
    role: UserRole
    permissions: List[str]
