from fastapi import APIRouter, status, Depends, Response
from fastapi.security import OAuth2PasswordRequestForm

from garment_erp.core.setting import config
from garment_erp.core.schemas.auth import LoginResponse, CurrentUser, MeResponse
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.auth.authentication import AuthService, ACCESS_TOKEN_EXPIRE_MINUTES
from garment_erp.core.auth.deps import get_current_user
from garment_erp.core.auth.permissions import get_role_permissions


router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User Login",
    description="""
    Authenticate a user and open a session.

    **Authentication Method:** OAuth2 Password Flow (compatible with Swagger UI 'Authorize' button)

    **Request Parameters:**
    - `username`: Username or email address
    - `password`: User password

    **Session:**
    The JWT is returned in the body and also set as an http-only cookie
    (`SESSION_COOKIE_NAME`). Browser clients rely on the cookie; API clients
    may send `Authorization: Bearer <access_token>` instead.
    """,
    responses={
        200: {"description": "Login successful - session cookie set"},
        401: {"description": "Invalid credentials - username or password incorrect"},
        403: {"description": "Account is disabled"},
    }
)
async def login(response: Response, form_data: OAuth2PasswordRequestForm = Depends()):
    """
    OAuth2 compatible token login; also sets the session cookie.
    """
    # 1. Validate Credentials
    user = await AuthService.authenticate_user(form_data.username, form_data.password)

    # 2. Generate Token
    token = AuthService.create_user_token(user)

    # 3. Session cookie
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    return LoginResponse(
        access_token=token,
        username=user.username,
        role=user.role,
        email=user.email,
        full_name=user.full_name
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="User Logout",
    description="Clears the session cookie. Bearer tokens simply expire.",
)
async def logout(response: Response):
    response.delete_cookie(key=config.SESSION_COOKIE_NAME)
    return {"detail": "Logged out"}


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current Session User",
    description="Returns the logged-in user together with the permissions granted to their role.",
    responses={401: {"description": "Missing or invalid session"}}
)
async def me(current_user: CurrentUser = Depends(get_current_user)):
    permissions = sorted(p.value for p in get_role_permissions(current_user.role))
    return MeResponse(**current_user.model_dump(), permissions=permissions)
