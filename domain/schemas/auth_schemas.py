from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from uuid import UUID


class SignUpRequest(BaseModel):
    email: EmailStr
    # Length is checked by the service so the configured minimum applies
    password: str
    full_name: str = Field(..., min_length=1)


class AdminSignUpRequest(SignUpRequest):
    signup_code: str


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: UUID
    roles: List[str]


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetRequested(BaseModel):
    message: str
    # Only populated outside production where no mail is sent
    reset_token: Optional[str] = None


class PasswordResetConfirm(BaseModel):
    token: str
    new_password: str


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str
