"""Authentication routes: registration, login and account tokens."""

from fastapi import APIRouter, Depends, HTTPException, status
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
    VerifyEmailRequest,
)
from storefront.auth.exceptions import InvalidCredentials
from storefront.auth.guards import current_user
from storefront.auth.login import LogIn
from storefront.auth.tokens import issue_token
from storefront.user.registration import RegisterUser
from storefront.user.user import Role, User
from storefront.user.verification import (
    RequestEmailVerification,
    RequestPasswordReset,
    ResetPassword,
    VerifyEmail,
)

auth_router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user_id: str) -> AuthResponse:
    user = current_domain.repository_for(User).get(user_id)
    return AuthResponse(token=issue_token(user), user=UserResponse.from_user(user))


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    """Create a `user` account and sign it in."""
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        role=Role.USER.value,
        phone=body.phone,
        address=body.address,
        avatar=body.avatar,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return _auth_response(user_id)


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    try:
        user_id = current_domain.process(LogIn(email=body.email, password=body.password), asynchronous=False)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return _auth_response(user_id)


@auth_router.post("/verify-email/request", response_model=MessageResponse)
async def request_email_verification(user: User = Depends(current_user)) -> MessageResponse:
    current_domain.process(RequestEmailVerification(user_id=str(user.id)), asynchronous=False)
    return MessageResponse(message="Verification email sent")


@auth_router.post("/verify-email", response_model=MessageResponse)
async def verify_email(body: VerifyEmailRequest) -> MessageResponse:
    current_domain.process(VerifyEmail(token=body.token), asynchronous=False)
    return MessageResponse(message="Email verified")


@auth_router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(body: ForgotPasswordRequest) -> MessageResponse:
    """Always answers the same way, whether or not the address is registered."""
    current_domain.process(RequestPasswordReset(email=body.email), asynchronous=False)
    return MessageResponse(message="If the address is registered, a reset link has been sent")


@auth_router.post("/reset-password", response_model=MessageResponse)
async def reset_password(body: ResetPasswordRequest) -> MessageResponse:
    current_domain.process(ResetPassword(token=body.token, new_password=body.new_password), asynchronous=False)
    return MessageResponse(message="Password has been reset")
