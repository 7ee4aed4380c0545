# api/routes_users.py
from fastapi import APIRouter, BackgroundTasks, Depends

from api.deps import get_actor, get_context, get_db
from api.schemas import ForgotPassword, PasswordChange, ProfileOut, ProfileUpdate, ResetPasswordIn
from core import auth_service, profile_service
from core.errors import ValidationError

router = APIRouter(tags=["users"])

RESET_SENT = "If an account with that email exists, we've sent a reset code."


@router.get("/users/me", response_model=ProfileOut)
def my_profile(db=Depends(get_db), actor=Depends(get_actor)):
    return profile_service.get_profile(db, actor.user_id)


@router.put("/users/me", response_model=ProfileOut)
def edit_my_profile(payload: ProfileUpdate, db=Depends(get_db), actor=Depends(get_actor)):
    return profile_service.update_profile(
        db,
        actor.user_id,
        full_name=payload.full_name,
        phone_number=payload.phone_number,
        delivery_address=payload.delivery_address,
    )


@router.put("/users/me/password")
def change_my_password(payload: PasswordChange, db=Depends(get_db), actor=Depends(get_actor)):
    profile_service.change_password(db, actor.user_id, payload.current_password, payload.new_password)
    return {"message": "Password changed successfully"}


@router.post("/auth/forgot-password")
def forgot_password(payload: ForgotPassword, background_tasks: BackgroundTasks,
                    db=Depends(get_db), context=Depends(get_context)):
    """Same answer whether or not the account exists."""
    email = (payload.email or "").strip()
    if not email:
        raise ValidationError("Email is required")
    if not auth_service.is_valid_email(email):
        raise ValidationError("Invalid email format")

    user, code = auth_service.create_reset_code(db, email)
    if user:
        background_tasks.add_task(context.mailer.send_password_reset, user.email, code, user.full_name)
    return {"message": RESET_SENT}


@router.post("/auth/reset-password")
def reset_password(payload: ResetPasswordIn, db=Depends(get_db)):
    ok, message = auth_service.reset_password(db, payload.email, payload.code, payload.password)
    if not ok:
        raise ValidationError(message)
    return {"message": message}
