# routers/program.py
# 프로필 분석 기반의 3/6/12 개월 피트니스 프로그램
from fastapi import APIRouter, Depends, HTTPException, status

from ..crud import program as program_crud
from ..dependencies import get_current_user
from ..schemas.program import MonthProgressUpdate
from ..utils import clock
from ..utils.body_metrics import analyze_profile, initial_prediction, compliance_prediction

router = APIRouter(prefix="/program", tags=["program"])


def current_month(program: dict) -> int:
    start = clock.parse_iso(program["start_date"])
    months = clock.calendar_months_between(start, clock.utcnow()) + 1
    return min(max(months, 1), program["total_months"])


def with_current_month(program: dict) -> dict:
    return {**program, "current_month": current_month(program)}


async def load_program(user_id: int) -> dict:
    program = await program_crud.get_program(user_id)
    if program is None:
        raise HTTPException(status_code=404, detail="No fitness program found. Create one first.")
    return program


def month_record(program: dict, month: int) -> dict:
    if not 1 <= month <= program["total_months"]:
        raise HTTPException(status_code=404, detail=f"Month {month} is outside this program.")
    return program["monthly_progress"][month - 1]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_program(current_user: dict = Depends(get_current_user)):
    if not current_user.get("weight") or not current_user.get("height"):
        raise HTTPException(status_code=400, detail="Height and weight are required to create a program.")

    analysis = analyze_profile(current_user["weight"], current_user["height"], current_user.get("fitness_goal"))
    total_months = analysis["recommended_duration"]
    start = clock.utcnow()
    program = {
        "start_date": clock.to_iso(start),
        "end_date": clock.to_iso(clock.add_months(start, total_months)),
        "total_months": total_months,
        "analysis": analysis,
        "is_active": True,
        "monthly_progress": [
            {
                "month": month,
                "is_completed": False,
                "completion_date": None,
                "diet_compliance": 0,
                "workout_compliance": 0,
                "weight_change": 0,
                "achievements": [],
                "prediction": initial_prediction(month, analysis["plan_type"]),
            }
            for month in range(1, total_months + 1)
        ],
    }
    await program_crud.save_program(current_user["id"], program)
    return with_current_month(program)


@router.get("")
async def read_program(current_user: dict = Depends(get_current_user)):
    return with_current_month(await load_program(current_user["id"]))


@router.put("/months/{month}")
async def update_month(month: int, body: MonthProgressUpdate, current_user: dict = Depends(get_current_user)):
    program = await load_program(current_user["id"])
    record = month_record(program, month)
    record.update(body.model_dump(exclude_unset=True, exclude_none=True))
    await program_crud.save_program(current_user["id"], program)
    return record


@router.get("/months/{month}/prediction")
async def read_prediction(month: int, current_user: dict = Depends(get_current_user)):
    program = await load_program(current_user["id"])
    record = month_record(program, month)
    analysis = program["analysis"]
    prediction = compliance_prediction(
        month, program["total_months"],
        record["diet_compliance"], record["workout_compliance"],
        analysis["plan_type"], analysis["weight_goal"],
    )
    return {"month": month, "prediction": prediction}


@router.post("/months/{month}/complete")
async def complete_month(month: int, current_user: dict = Depends(get_current_user)):
    program = await load_program(current_user["id"])
    record = month_record(program, month)
    record["is_completed"] = True
    record["completion_date"] = clock.to_iso(clock.utcnow())
    await program_crud.save_program(current_user["id"], program)
    return record
