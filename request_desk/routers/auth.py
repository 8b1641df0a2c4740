from fastapi import APIRouter, Depends

from ..core.current_user import get_desk
from ..core.desk import Desk
from ..schemas.account import AccountOut
from ..schemas.auth import LoginIn, PendingVerificationOut, RegisterIn, VerifyEmailIn

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AccountOut, status_code=201)
def register(payload: RegisterIn, desk: Desk = Depends(get_desk)):
    return desk.accounts.register(
        payload.first_name,
        payload.last_name,
        payload.email,
        payload.password,
        payload.confirm_password,
    )


@router.get("/pending-verification", response_model=PendingVerificationOut)
def pending_verification(desk: Desk = Depends(get_desk)):
    return PendingVerificationOut(email=desk.accounts.pending_verification())


@router.post("/verify-email", response_model=AccountOut)
def verify_email(payload: VerifyEmailIn | None = None, desk: Desk = Depends(get_desk)):
    return desk.accounts.verify_email(payload.email if payload else None)


@router.post("/login", response_model=AccountOut)
def login(payload: LoginIn, desk: Desk = Depends(get_desk)):
    return desk.accounts.login(payload.email, payload.password)


@router.post("/logout")
def logout(desk: Desk = Depends(get_desk)):
    desk.accounts.logout()
    return {"status": "ok"}
