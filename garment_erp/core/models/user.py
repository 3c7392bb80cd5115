from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import IndexModel, ASCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class UserRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    PRODUCTION_MANAGER = "PRODUCTION_MANAGER"
    CASHBOOK_MANAGER = "CASHBOOK_MANAGER"
    CUTTING_MANAGER = "CUTTING_MANAGER"
    REPORT_VIEWER = "REPORT_VIEWER"
    USER = "USER"


class User(Document):
    username: str = Field(..., min_length=3, max_length=50, description="Unique username for login.")
    email: str = Field(..., description="Login email address.")
    full_name: Optional[str] = Field(None, description="Display name")
    role: UserRole = Field(default=UserRole.USER, description="Assigned system role.")
    password: str = Field(..., min_length=8, description="Hashed password.")
    is_active: bool = True
    created_at: datetime = Field(default_factory=get_local_now)
    updated_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.USERS
        indexes = [
            IndexModel([("username", ASCENDING)], unique=True),
            IndexModel([("email", ASCENDING)], unique=True),
        ]
