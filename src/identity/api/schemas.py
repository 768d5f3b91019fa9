"""Pydantic request schemas for the Identity API.

Fields are optional so that missing values reach the domain, which reports
them with its own messages.
"""

from pydantic import BaseModel


class RegisterUserRequest(BaseModel):
    name: str | None = None
    email: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"name": "Ayesha Khan", "email": "ayesha@example.com"}]}}


class SetPasswordRequest(BaseModel):
    token: str | None = None
    newPassword: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(BaseModel):
    email: str | None = None


class ResetPasswordRequest(BaseModel):
    token: str | None = None
    newPassword: str | None = None


class RegisterAdminRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
