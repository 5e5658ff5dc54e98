"""Pydantic schemas for account API endpoints."""

from pydantic import BaseModel, EmailStr


class AccountRegisterRequest(BaseModel):
    """Request schema for account registration."""

    name: str
    email: EmailStr
    password: str


class AccountRegisterResponse(BaseModel):
    """Response schema for account registration."""

    user_id: int
    email: str
    message: str


class AccountLoginRequest(BaseModel):
    """Request schema for login."""

    email: EmailStr
    password: str


class AccountLoginResponse(BaseModel):
    """Response schema for login."""

    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str
