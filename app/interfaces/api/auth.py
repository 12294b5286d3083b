"""Auth API routes — signup, login, logout, password management, own account."""

from fastapi import APIRouter, Depends, Response, status

from app.config import get_settings
from app.application.services.auth_service import (
    authenticate_user,
    change_password,
    create_user,
    deactivate_user,
    issue_token,
    request_password_reset,
    reset_password,
    update_profile,
)
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
    SignupRequest,
    UpdateMeRequest,
    UpdatePasswordRequest,
    UserRead,
)
from app.infrastructure.mailer import EmailClient
from app.interfaces.api.deps import TOKEN_COOKIE, get_current_user
from app.interfaces.deps import get_mailer, get_user_repository

settings = get_settings()

router = APIRouter(prefix="/api/v1/users", tags=["Auth"])


def send_token(user: User, response: Response) -> AuthResponse:
    """Issue a bearer token, mirror it into an HTTP-only cookie, return it with the user."""
    token = issue_token(user)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.JWT_COOKIE_EXPIRATION_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return AuthResponse(token=token, data={"user": UserRead.model_validate(user)})


def reset_url_for(token: str) -> str:
    """Reset link built from the configured public origin, not the request Host header."""
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{router.prefix}/resetPassword/{token}"


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, response: Response, repo: UserRepository = Depends(get_user_repository)):
    user = create_user(
        repo,
        email=body.email,
        password=body.password,
        password_confirm=body.password_confirm,
        name=body.name,
        photo=body.photo,
    )
    return send_token(user, response)


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, response: Response, repo: UserRepository = Depends(get_user_repository)):
    user = authenticate_user(repo, body.email, body.password)
    return send_token(user, response)


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE, httponly=True, secure=settings.is_production, samesite="lax")
    return MessageResponse(message="Logged out")


@router.post("/forgotPassword", response_model=MessageResponse)
async def forgot_password(
    body: ForgotPasswordRequest,
    repo: UserRepository = Depends(get_user_repository),
    mailer: EmailClient = Depends(get_mailer),
):
    await request_password_reset(
        repo,
        mailer,
        body.email,
        reset_url_for=reset_url_for,
    )
    return MessageResponse(message="Token sent to email!")


@router.patch("/resetPassword/{token}", response_model=AuthResponse, name="reset_password")
def reset_password_route(
    token: str,
    body: ResetPasswordRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
):
    user = reset_password(repo, token, body.password, body.password_confirm)
    return send_token(user, response)


@router.patch("/updateMyPassword", response_model=AuthResponse)
def update_my_password(
    body: UpdatePasswordRequest,
    response: Response,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    user = change_password(repo, user, body.password_current, body.password, body.password_confirm)
    return send_token(user, response)


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return {"status": "success", "data": {"user": UserRead.model_validate(user)}}


@router.patch("/updateMe")
def update_me(
    body: UpdateMeRequest,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    user = update_profile(repo, user, body.model_dump(exclude_unset=True))
    return {"status": "success", "data": {"user": UserRead.model_validate(user)}}


@router.delete("/deleteMe", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    response: Response,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    deactivate_user(repo, user)
    response.delete_cookie(TOKEN_COOKIE, httponly=True, secure=settings.is_production, samesite="lax")
