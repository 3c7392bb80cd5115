from datetime import timedelta
from typing import Optional

from fastapi import HTTPException, status
from passlib.context import CryptContext
from jose import jwt

from garment_erp.core.setting import config
from garment_erp.core.models.user import User
from garment_erp.shared.timezone import get_naive_utc_now

# --- SECURITY CONFIGURATION ---
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256", "bcrypt"],
    deprecated=["bcrypt"]
)

SECRET_KEY = config.SECRET_KEY
ALGORITHM = config.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = config.ACCESS_TOKEN_EXPIRE_MINUTES


class AuthService:

    @staticmethod
    def hash_password(plain_password: str) -> str:
        return pwd_context.hash(plain_password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Unknown hash format or bcrypt 72-byte limit
            return False

    @staticmethod
    def create_access_token(data: dict, expires_minutes: Optional[int] = None):
        """Generates a JWT token."""
        to_encode = data.copy()
        expire = get_naive_utc_now() + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
        return encoded_jwt

    @staticmethod
    def create_user_token(user: User):
        """
        Generates a token containing all non-sensitive user details.
        """
        token_data = {
            "sub": user.username,
            "uid": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "full_name": user.full_name,
        }

        return AuthService.create_access_token(token_data)

    @staticmethod
    async def authenticate_user(login_id: str, password: str) -> User:
        user = await User.find_one(
            {
                "$or": [
                    {"username": login_id},
                    {"email": login_id}
                ]
            }
        )

        if not user or not AuthService.verify_password(password, user.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username/email or password"
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is disabled"
            )

        return user

    @staticmethod
    async def get_full_user_data(username: str):
        """
        Fetches the user behind a token subject.
        Used by get_current_user dependency.
        """
        user = await User.find_one(User.username == username)
        if not user or not user.is_active:
            return None

        return {
            "id": str(user.id),
            "username": user.username,
            "email": user.email,
            "full_name": user.full_name,
            "role": user.role,
        }
