from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

# Import schemas and service
from garment_erp.core.setting import config
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.auth.authentication import AuthService, SECRET_KEY, ALGORITHM
from garment_erp.core.auth.permissions import Permission, has_any_permission

# Bearer header is optional; the session cookie is the primary carrier
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{config.API_V1_STR}/auth/login", auto_error=False)


async def get_current_user(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
) -> CurrentUser:
    """
    Dependency that decodes the session JWT and fetches the user's current data.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = request.cookies.get(config.SESSION_COOKIE_NAME) or bearer_token
    if not token:
        raise credentials_exception

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user_data = await AuthService.get_full_user_data(username)

    if user_data is None:
        raise credentials_exception

    return CurrentUser(**user_data)


def require_permission(*required: Permission):
    """
    Dependency factory that checks the session role against the static
    role/permission table. Passing several permissions grants access when
    the role holds any one of them.
    """
    async def permission_checker(
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if not has_any_permission(current_user.role, required):
            perms_str = ", ".join(p.value for p in required)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Operation not permitted. Requires one of the following permissions: {perms_str}",
            )
        return current_user

    return permission_checker

