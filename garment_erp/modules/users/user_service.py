from typing import List
import logging

from fastapi import HTTPException, status

from garment_erp.core.auth.authentication import AuthService
from garment_erp.core.models.user import User, UserRole
from garment_erp.core.schemas.user import CreateUserRequest, UpdateUserRequest
from garment_erp.shared.object_id import to_object_id
from garment_erp.shared.timezone import get_local_now

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    async def list_users() -> List[User]:
        return await User.find_all().sort("+username").to_list()

    @staticmethod
    async def get_user(user_id: str) -> User:
        user = await User.get(to_object_id(user_id, "User"))
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    @staticmethod
    async def create_user(data: CreateUserRequest) -> User:
        existing = await User.find_one(
            {"$or": [{"username": data.username}, {"email": data.email}]}
        )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username or email already registered"
            )

        user = User(
            username=data.username,
            email=data.email,
            full_name=data.full_name,
            role=data.role,
            password=AuthService.hash_password(data.password),
        )
        await user.insert()
        logger.info(f"User {user.username} created with role {user.role.value}")
        return user

    @staticmethod
    async def update_user(user_id: str, data: UpdateUserRequest) -> User:
        user = await UserService.get_user(user_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(user, field, value)
        user.updated_at = get_local_now()
        await user.save()
        logger.info(f"User {user.username} updated: role={user.role.value}, active={user.is_active}")
        return user

    @staticmethod
    async def delete_user(user_id: str) -> None:
        user = await UserService.get_user(user_id)
        if user.role == UserRole.SUPER_ADMIN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Super admin accounts cannot be deleted"
            )
        await user.delete()
        logger.info(f"User {user.username} deleted")
