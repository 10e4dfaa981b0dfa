# routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.config import APP_ENV
from ..crud import user as user_crud
from ..dependencies import get_current_user
from ..schemas.user import UserRegister, UserLogin, UpdateDetails, UpdatePassword, ForgotPassword, ResetPassword, ProfileUpdate
from ..utils.jwt_handler import create_user_token
from ..utils.security import hash_password, verify_password, generate_reset_token, hash_reset_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def token_response(user: dict, message: str) -> dict:
    return {
        "success": True,
        "message": message,
        "token": create_user_token(user),
        "token_type": "bearer",
        "data": user_crud.to_public(user),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: UserRegister):
    conflict = await user_crud.find_conflict(body.username, body.email)
    if conflict:
        raise HTTPException(status_code=400, detail=f"User with that {conflict} already exists")

    user_id = await user_crud.create_user(body.username, body.email, hash_password(body.password))
    user = await user_crud.get_user_by_id(user_id)
    logger.info("registered user %s", user_id)
    return token_response(user, "User registered successfully")


@router.post("/login")
async def login(body: UserLogin):
    user = await user_crud.get_user_by_email(body.email)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if user_crud.is_locked(user):
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail="Account is temporarily locked due to too many failed login attempts. Please try again later.",
        )

    if not verify_password(body.password, user["hashed_password"]):
        await user_crud.record_failed_login(user)
        logger.info("failed login for user %s", user["id"])
        raise HTTPException(status_code=401, detail="Invalid credentials")

    await user_crud.record_successful_login(user["id"])
    user = await user_crud.get_user_by_id(user["id"])
    return token_response(user, "Login successful")


@router.get("/logout")
async def logout(current_user: dict = Depends(get_current_user)):
    # 토큰은 클라이언트가 버림. 서버에 세션 상태는 없음
    return {"success": True, "message": "User logged out successfully"}


@router.get("/me")
async def get_me(current_user: dict = Depends(get_current_user)):
    return {"success": True, "data": user_crud.to_public(current_user)}


@router.put("/updatedetails")
async def update_details(body: UpdateDetails, current_user: dict = Depends(get_current_user)):
    conflict = await user_crud.find_conflict(body.username, body.email, exclude_id=current_user["id"])
    if conflict:
        raise HTTPException(status_code=400, detail=f"User with that {conflict} already exists")

    await user_crud.update_details(current_user["id"], body.username, body.email)
    user = await user_crud.get_user_by_id(current_user["id"])
    return {"success": True, "message": "Profile updated successfully", "data": user_crud.to_public(user)}


@router.put("/updateprofile")
async def update_profile(body: ProfileUpdate, current_user: dict = Depends(get_current_user)):
    await user_crud.update_profile(current_user["id"], body.model_dump(exclude_unset=True))
    user = await user_crud.get_user_by_id(current_user["id"])
    return {"success": True, "message": "Profile updated successfully", "data": user_crud.to_public(user)}


@router.put("/updatepassword")
async def update_password(body: UpdatePassword, current_user: dict = Depends(get_current_user)):
    if not verify_password(body.current_password, current_user["hashed_password"]):
        raise HTTPException(status_code=401, detail="Password is incorrect")

    await user_crud.update_password(current_user["id"], hash_password(body.new_password))
    return token_response(current_user, "Password updated successfully")


@router.post("/forgotpassword")
async def forgot_password(body: ForgotPassword):
    user = await user_crud.get_user_by_email(body.email)
    if user is None:
        raise HTTPException(status_code=404, detail="There is no user with that email")

    raw_token, hashed_token = generate_reset_token()
    await user_crud.set_reset_token(user["id"], hashed_token)
    logger.info("password reset requested for user %s", user["id"])

    response = {"success": True, "message": "Password reset email sent"}
    # 메일 발송은 없음. 개발 환경에서만 토큰을 그대로 돌려줌
    if APP_ENV == "development":
        response["reset_token"] = raw_token
    return response


@router.put("/resetpassword/{reset_token}")
async def reset_password(reset_token: str, body: ResetPassword):
    user = await user_crud.get_user_by_reset_token(hash_reset_token(reset_token))
    if user is None:
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    await user_crud.reset_password(user["id"], hash_password(body.password))
    user = await user_crud.get_user_by_id(user["id"])
    return token_response(user, "Password reset successful")
