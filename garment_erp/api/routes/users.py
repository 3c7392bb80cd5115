from fastapi import APIRouter, status, Depends
from typing import List

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission, ROLE_PERMISSIONS
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    RolePermissionsResponse,
)
from garment_erp.modules.users.user_service import UserService


router = APIRouter(prefix="/admin", tags=["User Administration"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List Users",
)
async def list_users(current_user: CurrentUser = Depends(require_permission(Permission.READ_USER))):
    return await UserService.list_users()


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="""
    Create a login account.

    **Business Rules:**
    - Username and email must be unique (409 otherwise)
    - Password is stored hashed (pbkdf2_sha256)
    """,
    responses={409: {"description": "Username or email already registered"}}
)
async def create_user(
    payload: CreateUserRequest,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_USER))
):
    return await UserService.create_user(payload)


@router.patch(
    "/users/{user_id}",
    response_model=UserResponse,
    summary="Change Role / Active Flag",
)
async def update_user(
    user_id: str,
    payload: UpdateUserRequest,
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_USER, Permission.MANAGE_ROLES))
):
    return await UserService.update_user(user_id, payload)


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Delete User",
    responses={403: {"description": "Super admin accounts cannot be deleted"}}
)
async def delete_user(
    user_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_USER))
):
    await UserService.delete_user(user_id)
    return {"detail": "User deleted"}


@router.get(
    "/roles",
    response_model=List[RolePermissionsResponse],
    summary="Role / Permission Table",
    description="The static allow-list every route is checked against.",
)
async def list_roles(
    current_user: CurrentUser = Depends(require_permission(Permission.MANAGE_ROLES, Permission.READ_USER))
):
    return [
        RolePermissionsResponse(role=role, permissions=sorted(p.value for p in perms))
        for role, perms in ROLE_PERMISSIONS.items()
    ]
