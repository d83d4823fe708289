"""
SoYummy User Endpoints
Registration, email verification, sessions and profile updates
"""

from fastapi import APIRouter, File, Response, UploadFile, status

from core.dependencies import CurrentUser, Database
from schemas.auth_schemas import (
    AvatarResponse, EmailVerificationRequest, LoginResponse, MessageResponse,
    RegisterResponse, UserCreate, UserLogin, UserPublic
)
from services.auth_service import auth_service

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Database):
    """
    Register a new user account

    The account stays unverified until the emailed link is followed.
    """
    user = await auth_service.register_user(user_data, db)
    return RegisterResponse(user=UserPublic.model_validate(user))


@router.post("/login", response_model=LoginResponse)
async def login(login_data: UserLogin, db: Database):
    """Authenticate user and return a session token"""
    user, token = await auth_service.authenticate_user(login_data, db)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


@router.get("/current", response_model=UserPublic)
async def get_current_user_info(current_user: CurrentUser):
    return UserPublic.model_validate(current_user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(current_user: CurrentUser, db: Database):
    """Invalidate the current session token"""
    await auth_service.logout_user(current_user, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/subscription", response_model=MessageResponse)
async def update_subscription(current_user: CurrentUser, db: Database):
    """Subscribe the current user to the newsletter"""
    await auth_service.subscribe(current_user, db)
    return MessageResponse(message="You successfully subscribed to newsletter")


@router.patch("/avatar", response_model=AvatarResponse)
async def update_avatar(
    current_user: CurrentUser,
    db: Database,
    avatar: UploadFile = File(...),
):
    """Upload a new avatar image"""
    avatar_url = await auth_service.update_avatar(
        current_user, avatar.file, avatar.content_type, avatar.size or 0, db
    )
    return AvatarResponse(avatar_url=avatar_url)


@router.get("/verify/{verification_token}", response_model=MessageResponse)
async def verify_email(verification_token: str, db: Database):
    """Redeem the token sent in the verification email"""
    await auth_service.verify_email(verification_token, db)
    return MessageResponse(message="Verification successful")


@router.post("/verify", response_model=MessageResponse)
async def resend_verification_email(request_data: EmailVerificationRequest, db: Database):
    await auth_service.resend_verification_email(request_data.email, db)
    return MessageResponse(message="Verification email sent")
