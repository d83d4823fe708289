"""
SoYummy Authentication Service
JWT authentication, email verification and account updates
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional, Dict, Any, Tuple, BinaryIO

import structlog
from jose import JWTError, jwt
from motor.motor_asyncio import AsyncIOMotorDatabase
from passlib.context import CryptContext
from pymongo.errors import DuplicateKeyError

from core.config import get_settings
from core.database import USERS
from core.exceptions import (
    BadRequestError, ConflictError, NotFoundError, SoYummyError, UnauthorizedError
)
from models.users import User
from schemas.auth_schemas import UserCreate, UserLogin
from services.avatar_service import avatar_service
from services.email_service import email_service
from utils.mongo_utils import parse_object_id

settings = get_settings()
logger = structlog.get_logger()

INVALID_CREDENTIALS = "Email or password is wrong"


class AuthenticationError(UnauthorizedError):
    """Raised when a session token cannot be validated"""
    default_message = "Not authorized"


class AuthService:
    def __init__(self):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )
        self.email_service = email_service
        self.avatar_service = avatar_service

        # JWT settings
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_hours = settings.JWT_ACCESS_TOKEN_EXPIRE_HOURS

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        """Hash a password"""
        return self.pwd_context.hash(password)

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create JWT access token"""
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(hours=self.access_token_expire_hours)

        to_encode.update({
            "exp": expire,
            "iat": datetime.utcnow(),
        })

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify and decode JWT token"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthenticationError() from e

    async def register_user(self, user_data: UserCreate, db: AsyncIOMotorDatabase) -> User:
        """Create an unverified account and send its verification link"""
        email = user_data.email.lower()

        if await db[USERS].find_one({"email": email}, {"_id": 1}):
            logger.info("Registration rejected", reason="email_in_use", email=email)
            raise ConflictError("Email already in use")

        verification_token = secrets.token_urlsafe(16)
        document = User.new_document(
            name=user_data.name,
            email=email,
            password_hash=self.get_password_hash(user_data.password),
            verification_token=verification_token,
        )

        try:
            result = await db[USERS].insert_one(document)
        except DuplicateKeyError:
            # Concurrent registration won the unique index
            raise ConflictError("Email already in use")

        document["_id"] = result.inserted_id
        user = User.from_mongo(document)

        sent = await self.email_service.send_email_verification(
            user.email, user.name, verification_token
        )
        if not sent:
            logger.warning("Verification email not delivered", user_id=str(user.id))

        logger.info("User registered", user_id=str(user.id))
        return user

    async def authenticate_user(
        self,
        login_data: UserLogin,
        db: AsyncIOMotorDatabase
    ) -> Tuple[User, str]:
        """Check credentials and issue a session token"""
        user = User.from_mongo(await db[USERS].find_one({"email": login_data.email.lower()}))

        # Same message for unknown email and wrong password
        if not user or not self.verify_password(login_data.password, user.password):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.verify:
            raise UnauthorizedError("Email not verified")

        token = self.create_access_token(data={"sub": str(user.id)})
        await db[USERS].update_one({"_id": user.id}, {"$set": {"token": token}})

        logger.info("User logged in", user_id=str(user.id))
        return user, token

    async def logout_user(self, user: User, db: AsyncIOMotorDatabase) -> None:
        await db[USERS].update_one({"_id": user.id}, {"$set": {"token": None}})
        logger.info("User logged out", user_id=str(user.id))

    async def get_current_user(self, token: str, db: AsyncIOMotorDatabase) -> User:
        """
        Resolve the user owning a session token

        The token must decode, name an existing user, and equal the token
        stored on that user (cleared by logout).
        """
        payload = self.verify_token(token)

        user_id = parse_object_id(payload.get("sub"))
        if user_id is None:
            raise AuthenticationError()

        user = User.from_mongo(await db[USERS].find_one({"_id": user_id}))
        if not user or not user.token or user.token != token:
            raise AuthenticationError()

        return user

    async def verify_email(self, verification_token: str, db: AsyncIOMotorDatabase) -> None:
        """Redeem a verification token; the token is single-use"""
        result = await db[USERS].update_one(
            {"verificationToken": verification_token},
            {"$set": {"verify": True, "verificationToken": None}},
        )
        if result.matched_count == 0:
            raise NotFoundError("User not found")

        logger.info("Email verified")

    async def resend_verification_email(self, email: str, db: AsyncIOMotorDatabase) -> None:
        user = User.from_mongo(await db[USERS].find_one({"email": email.lower()}))

        if not user:
            raise NotFoundError("User not found")

        if user.verify:
            raise BadRequestError("Verification has already been passed")

        sent = await self.email_service.send_email_verification(
            user.email, user.name, user.verification_token
        )
        if not sent:
            raise SoYummyError("Failed to send verification email")

    async def subscribe(self, user: User, db: AsyncIOMotorDatabase) -> None:
        """Subscribe the user to the newsletter"""
        result = await db[USERS].update_one(
            {"_id": user.id, "subscription": {"$ne": True}},
            {"$set": {"subscription": True}},
        )
        if result.matched_count == 0:
            raise ConflictError("You have already subscribed")

        sent = await self.email_service.send_subscription_confirmation(user.email, user.name)
        if not sent:
            logger.warning("Subscription email not delivered", user_id=str(user.id))

        logger.info("User subscribed", user_id=str(user.id))

    async def update_avatar(
        self,
        user: User,
        file: BinaryIO,
        content_type: str,
        size: int,
        db: AsyncIOMotorDatabase
    ) -> str:
        """Upload a new avatar and store its URL on the user"""
        self.avatar_service.validate(content_type, size)

        avatar_url = await self.avatar_service.upload(file, str(user.id))
        await db[USERS].update_one({"_id": user.id}, {"$set": {"avatarURL": avatar_url}})

        return avatar_url


# Create singleton instance
auth_service = AuthService()
