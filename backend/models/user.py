"""
AutoTrack - User Models
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Initial user models
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class UserCreate(BaseModel):
    """User registration request (id comes from Firebase)"""
    firebase_user_id: str = Field(..., min_length=1, description="Firebase Authentication UID")
    user_email: EmailStr
    user_name: str


class UserUpdate(BaseModel):
    """Full user update; the UID in the path is authoritative"""
    firebase_user_id: Optional[str] = None
    user_email: EmailStr
    user_name: str
