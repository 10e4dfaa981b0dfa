# routers/profile.py
from fastapi import APIRouter, Depends, HTTPException

from ..crud import user as user_crud
from ..dependencies import get_current_user
from ..schemas.user import ProfileUpdate, Onboarding
from ..utils.body_metrics import bmi_summary, analyze_profile

router = APIRouter(prefix="/profile", tags=["profile"])


def profile_response(user: dict) -> dict:
    public = user_crud.to_public(user)
    return {
        "profile": public["profile"],
        "bmi": public["bmi"],
        "onboarding_complete": user_crud.is_profile_complete(public["profile"]),
    }


@router.get("")
async def read_profile(current_user: dict = Depends(get_current_user)):
    return profile_response(current_user)


@router.put("")
async def update_profile(body: ProfileUpdate, current_user: dict = Depends(get_current_user)):
    await user_crud.update_profile(current_user["id"], body.model_dump(exclude_unset=True))
    return profile_response(await user_crud.get_user_by_id(current_user["id"]))


@router.post("/onboarding")
async def complete_onboarding(body: Onboarding, current_user: dict = Depends(get_current_user)):
    await user_crud.update_profile(current_user["id"], body.model_dump())
    return profile_response(await user_crud.get_user_by_id(current_user["id"]))


@router.get("/bmi")
async def read_bmi(current_user: dict = Depends(get_current_user)):
    summary = bmi_summary(current_user.get("weight"), current_user.get("height"))
    if summary is None:
        raise HTTPException(status_code=400, detail="Height and weight are required to calculate BMI.")
    return summary


@router.get("/analysis")
async def read_analysis(current_user: dict = Depends(get_current_user)):
    if not current_user.get("weight") or not current_user.get("height"):
        raise HTTPException(status_code=400, detail="Height and weight are required for profile analysis.")
    return analyze_profile(current_user["weight"], current_user["height"], current_user.get("fitness_goal"))
