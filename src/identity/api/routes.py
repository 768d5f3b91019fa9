"""FastAPI routes for the Identity domain: customer accounts and admin accounts."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from protean.utils.globals import current_domain

from identity.admin.admin import Admin
from identity.admin.management import RegisterAdmin, authenticate_admin
from identity.api.auth import Principal, require_admin, require_principal
from identity.api.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterAdminRequest,
    RegisterUserRequest,
    ResetPasswordRequest,
    SetPasswordRequest,
)
from identity.shared.tokens import issue_token
from identity.user.authentication import authenticate_user
from identity.user.password_reset import ResetPassword, forgot_password
from identity.user.queries import list_users
from identity.user.registration import CREATED, register_user
from identity.user.verification import SetPassword, verify_email
from shared.web import get_app_settings, get_dispatcher

# ---------------------------------------------------------------------------
# Customer accounts
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/api/users", tags=["users"])


@user_router.post("/register")
async def register(body: RegisterUserRequest, dispatcher=Depends(get_dispatcher)):
    outcome = register_user(body.name, body.email, dispatcher=dispatcher)
    if outcome == CREATED:
        return JSONResponse(
            status_code=201,
            content={
                "success": True,
                "msg": "Registration successful! A verification link has been sent to your email address.",
            },
        )
    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "msg": "User already exists but not verified. A new verification link has been sent to your email.",
        },
    )


@user_router.get("/verify-email")
async def verify(token: str = "", settings=Depends(get_app_settings)):
    return RedirectResponse(url=verify_email(token, settings.frontend_url), status_code=307)


@user_router.post("/set-password")
async def set_password(body: SetPasswordRequest):
    current_domain.process(SetPassword(token=body.token, new_password=body.newPassword), asynchronous=False)
    return {"success": True, "msg": "Password set successfully. You can now log in."}


@user_router.post("/login")
def login(body: LoginRequest, settings=Depends(get_app_settings)):
    user = authenticate_user(body.email, body.password)
    return {"success": True, "token": issue_token(str(user.id), settings), "user": user.to_dict()}


@user_router.post("/forgot-password")
async def request_reset(body: ForgotPasswordRequest, dispatcher=Depends(get_dispatcher)):
    forgot_password(body.email, dispatcher=dispatcher)
    return {"success": True, "msg": "If an account with that email exists, a password reset link has been sent."}


@user_router.post("/reset-password")
async def reset_password(body: ResetPasswordRequest):
    current_domain.process(ResetPassword(token=body.token, new_password=body.newPassword), asynchronous=False)
    return {
        "success": True,
        "msg": "Password has been reset successfully. You can now log in with your new password.",
    }


@user_router.get("/profile")
async def profile(principal: Principal = Depends(require_principal)):
    return {"success": True, "user": principal.user}


# ---------------------------------------------------------------------------
# Admin accounts
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/api/admin", tags=["admin"])


@admin_router.post("/register", status_code=201)
async def register_admin(body: RegisterAdminRequest, request: Request):
    admin_id = current_domain.process(
        RegisterAdmin(name=body.name, email=body.email, password=body.password),
        asynchronous=False,
    )
    admin = current_domain.repository_for(Admin).get(admin_id)
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "token": issue_token(admin_id, request.app.state.settings),
            "admin": admin.to_dict(),
        },
    )


@admin_router.post("/login")
def login_admin(body: LoginRequest, settings=Depends(get_app_settings)):
    admin = authenticate_admin(body.email, body.password)
    return {"success": True, "token": issue_token(str(admin.id), settings), "admin": admin.to_dict()}


@admin_router.get("/users")
async def users(_: Principal = Depends(require_admin)):
    return {"users": [user.to_dict() for user in list_users()]}
