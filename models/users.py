"""
SoYummy User Models
Document model for user accounts stored in MongoDB
"""

from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from libgravatar import Gravatar
from pydantic import BaseModel, ConfigDict, Field


def gravatar_url(email: str, size: int = 250) -> str:
    """Default avatar for a new account, derived from the email address"""
    return Gravatar(email).get_image(size=size, default="identicon", use_ssl=True)


class User(BaseModel):
    """User account document"""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: ObjectId = Field(alias="_id")
    name: str
    email: str
    password: str = Field(repr=False)
    avatar_url: Optional[str] = Field(default=None, alias="avatarURL")
    subscription: bool = False
    verify: bool = False
    verification_token: Optional[str] = Field(default=None, alias="verificationToken")
    token: Optional[str] = Field(default=None, repr=False)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @classmethod
    def from_mongo(cls, document: Optional[Dict[str, Any]]) -> Optional["User"]:
        if document is None:
            return None
        return cls.model_validate(document)

    @staticmethod
    def new_document(
        name: str,
        email: str,
        password_hash: str,
        verification_token: str,
    ) -> Dict[str, Any]:
        """Build the document inserted on registration"""
        return {
            "name": name,
            "email": email,
            "password": password_hash,
            "avatarURL": gravatar_url(email),
            "subscription": False,
            "verify": False,
            "verificationToken": verification_token,
            "token": None,
            "createdAt": datetime.utcnow(),
        }
