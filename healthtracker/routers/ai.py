# routers/ai.py
# 다른 클라이언트가 relay 로 사용하는 엔드포인트. 여기서는 OpenAI 를 직접 호출
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.config import OPENAI_MODEL
from ..core.errors import PlanGenerationError
from ..dependencies import get_current_user
from ..schemas.ai import PromptRequest, MIN_PROMPT_LENGTH
from ..services import plan_generation
from ..utils import openai_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

LABELS = {
    "diet": "Diet plan",
    "workout": "Workout plan",
    "recommendations": "AI recommendations",
}


async def _generate(kind: str, body: PromptRequest):
    if len(body.prompt.strip()) < MIN_PROMPT_LENGTH:
        return JSONResponse(status_code=400, content={
            "success": False,
            "message": "Validation failed",
            "errors": [f"Prompt must be at least {MIN_PROMPT_LENGTH} characters long"],
        })
    if not openai_client.is_configured():
        return JSONResponse(status_code=500, content={
            "success": False,
            "message": "OpenAI API key not configured on server",
        })

    try:
        data = await plan_generation.direct_strategy(kind, body.prompt)
    except PlanGenerationError as e:
        logger.error("%s generation failed: %s", kind, e.message)
        return JSONResponse(status_code=e.status_code, content={"success": False, "message": e.message})

    return {"success": True, "message": f"{LABELS[kind]} generated successfully", "data": data}


@router.post("/generate-diet-plan")
async def generate_diet_plan(body: PromptRequest, current_user: dict = Depends(get_current_user)):
    return await _generate("diet", body)


@router.post("/generate-workout-plan")
async def generate_workout_plan(body: PromptRequest, current_user: dict = Depends(get_current_user)):
    return await _generate("workout", body)


@router.post("/generate-recommendations")
async def generate_recommendations(body: PromptRequest, current_user: dict = Depends(get_current_user)):
    return await _generate("recommendations", body)


@router.get("/status")
async def ai_status(current_user: dict = Depends(get_current_user)):
    configured = openai_client.is_configured()
    return {
        "success": True,
        "data": {
            "openai_configured": configured,
            "model": OPENAI_MODEL,
            "status": "ready" if configured else "not_configured",
        },
    }
