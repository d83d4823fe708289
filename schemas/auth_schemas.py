"""
SoYummy Authentication Schemas
Pydantic models for authentication requests and responses
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserBase(BaseModel):
    """Base user schema with common fields"""
    email: EmailStr


class UserCreate(UserBase):
    """Schema for user registration"""
    name: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Reject blank names"""
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v.strip()


class UserLogin(UserBase):
    """Schema for user login"""
    password: str = Field(..., min_length=1)


class EmailVerificationRequest(UserBase):
    """Schema for resending the verification email"""


class UserPublic(BaseModel):
    """Schema for the public part of a user"""
    email: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    user: UserPublic


class LoginResponse(BaseModel):
    token: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str


class AvatarResponse(BaseModel):
    """Schema for the avatar update response"""
    avatar_url: str = Field(..., serialization_alias="avatarURL")
