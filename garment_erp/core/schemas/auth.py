from typing import Optional, List
from pydantic import BaseModel, Field

from garment_erp.core.models.user import UserRole

# --- Response ---
class LoginResponse(BaseModel):
    access_token: str = Field(..., description="The access token for subsequent requests.")
    token_type: str = Field(default="bearer", description="Type of the token.")
    username: str = Field(..., description="Username associated with the account.")
    role: UserRole = Field(..., description="The user's role.")
    email: str = Field(..., description="The user's email address.")
    full_name: Optional[str] = Field(None, description="The user's full name.")

# --- Internal Schema for Dependency ---
# This is what get_current_user returns to your routes
class CurrentUser(BaseModel):

    id: str
    username: str
    email: str
    full_name: Optional[str] = None
    role: UserRole


class MeResponse(CurrentUser):
    permissions: List[str] = Field(default_factory=list)
