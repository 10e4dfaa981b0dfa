# utils/openai_client.py
import logging

from openai import AsyncOpenAI, AsyncAzureOpenAI, OpenAIError

from ..core.config import (
    OPENAI_API_KEY,
    OPENAI_MODEL,
    AZURE_OPENAI_ENDPOINT,
    AZURE_OPENAI_API_VERSION,
    OPENAI_TIMEOUT,
)
from ..core.errors import AIConfigurationError, AIRequestError

logger = logging.getLogger(__name__)

_chat_client = None


def is_configured() -> bool:
    return bool(OPENAI_API_KEY)


def get_chat_client():
    """AZURE_OPENAI_ENDPOINT 가 있으면 Azure, 없으면 OpenAI 클라이언트를 한 번만 생성합니다."""
    global _chat_client
    if not OPENAI_API_KEY:
        raise AIConfigurationError("OpenAI API key not configured")
    if _chat_client is None:
        if AZURE_OPENAI_ENDPOINT:
            _chat_client = AsyncAzureOpenAI(
                api_key=OPENAI_API_KEY,
                azure_endpoint=AZURE_OPENAI_ENDPOINT,
                api_version=AZURE_OPENAI_API_VERSION,
                timeout=OPENAI_TIMEOUT,
            )
        else:
            _chat_client = AsyncOpenAI(api_key=OPENAI_API_KEY, timeout=OPENAI_TIMEOUT)
    return _chat_client


WORKOUT_SYSTEM_PROMPT = """You are a professional fitness trainer and exercise physiologist with expertise in goal-specific training and medical considerations.

CRITICAL REQUIREMENTS:
1. ALWAYS align exercises with the user's fitness goal:
   FAT BURNING: high-intensity cardio (15-20 reps, 30-45 sec rest), HIIT, circuit training, compound movements.
   MUSCLE BUILDING: heavy weight training (6-12 reps, 60-90 sec rest), progressive overload, split training.
   WEIGHT GAIN: moderate weight training (8-12 reps, 60-90 sec rest), compound lifts, limited low-intensity cardio.
   GENERAL FITNESS: balanced mix of 3 strength, 2-3 cardio and 1 flexibility day at moderate intensity.
2. NEVER recommend exercises that conflict with health conditions:
   High Blood Pressure: avoid breath-holding, isometric holds and inverted positions.
   Diabetes: monitor intensity and include regular movement breaks.
   PCOS: favour strength training with moderate cardio and avoid overtraining.
3. Adjust sets, reps and rest periods to the specific goal and health status.

Always respond with ONLY a valid JSON object. No explanatory text, markdown, or code blocks."""

WORKOUT_RESPONSE_FORMAT = """
IMPORTANT: Analyze the user's fitness goal and health conditions carefully, then respond with ONLY a JSON object in this EXACT format:
{
  "Monday": {
    "exercises": [
      {"name": "Exercise name with clear description", "sets": 3, "reps": 15, "restTime": "60 seconds", "equipment": "Equipment needed or 'None'"}
    ],
    "duration": "45 minutes",
    "warmup": ["Specific warmup exercise 1", "Specific warmup exercise 2"],
    "cooldown": ["Specific cooldown exercise 1", "Specific cooldown exercise 2"]
  },
  "Tuesday": { "exercises": [], "duration": "", "warmup": [], "cooldown": [] },
  "Wednesday": { "exercises": [], "duration": "", "warmup": [], "cooldown": [] },
  "Thursday": { "exercises": [], "duration": "", "warmup": [], "cooldown": [] },
  "Friday": { "exercises": [], "duration": "", "warmup": [], "cooldown": [] },
  "Saturday": { "exercises": [], "duration": "", "warmup": [], "cooldown": [] }
}

ENSURE complete goal-specific workout plans for all 6 days and no exercises that conflict with health conditions."""

DIET_SYSTEM_PROMPT = """You are a professional nutritionist and dietitian with expertise in sports nutrition and medical dietary requirements.

CRITICAL REQUIREMENTS:
1. ALWAYS align macronutrients and calories with the user's fitness goal:
   FAT BURNING: high protein (35-40%), low carbs (25-30%), low fats (25-30%), 15-20% calorie deficit.
   MUSCLE BUILDING: high protein (25-30%), high carbs (45-50%), moderate fats (20-25%), 10-15% surplus.
   WEIGHT GAIN: moderate protein (20-25%), high carbs (50-55%), higher fats (25-30%), 15-25% surplus.
   GENERAL FITNESS: balanced protein (25%), moderate carbs (45%), moderate fats (30%), maintenance calories.
2. NEVER recommend foods that conflict with health conditions:
   Diabetes: avoid high sugar, refined carbs, sugary fruits, white bread and rice.
   High Blood Pressure: avoid high sodium foods, excessive caffeine and processed meats.
   PCOS: prefer low glycemic foods, lean proteins and anti-inflammatory fats.
3. Keep the evening snack light (80-150 calories) and easy to digest.

Always respond with ONLY a valid JSON object. No explanatory text, markdown, or code blocks."""

DIET_RESPONSE_FORMAT = """
IMPORTANT: Analyze the user's fitness goal and health conditions carefully, then respond with ONLY a JSON object in this EXACT format:
{
  "breakfast": {"time": "8:00 AM", "foods": ["Specific food with portion size"], "calories": 350},
  "morningSnack": {"time": "10:00 AM", "foods": ["Light snack with portion size"], "calories": 150},
  "lunch": {"time": "12:00 PM", "foods": ["Specific food with portion size"], "calories": 450},
  "afternoonSnack": {"time": "3:00 PM", "foods": ["Healthy snack with portion size"], "calories": 120},
  "dinner": {"time": "6:00 PM", "foods": ["Specific food with portion size"], "calories": 400},
  "eveningSnack": {"time": "10:00 PM", "foods": ["Light, easy-to-digest snack"], "calories": 100},
  "macros": {"protein": 120, "carbs": 150, "fats": 45},
  "dailyCalories": 1570,
  "tips": ["Goal-specific nutrition tip"]
}

ENSURE macros and calories match the fitness goal and no foods conflict with health conditions."""

RECOMMENDATIONS_SYSTEM_PROMPT = """You are an AI health coach. Give specific, encouraging and actionable advice based on the user's progress.

Always respond with ONLY a valid JSON object of the form {"recommendations": [{"type": "motivation|warning|suggestion|achievement", "title": "...", "message": "...", "priority": "high|medium|low"}]}."""

PROMPTS = {
    "workout": (WORKOUT_SYSTEM_PROMPT, WORKOUT_RESPONSE_FORMAT, 2500),
    "diet": (DIET_SYSTEM_PROMPT, DIET_RESPONSE_FORMAT, 2000),
    "recommendations": (RECOMMENDATIONS_SYSTEM_PROMPT, "", 1000),
}


async def request_completion(kind: str, prompt: str) -> str:
    """kind 에 맞는 시스템 프롬프트로 chat completion 을 호출하고 원문 텍스트를 반환합니다."""
    system_prompt, response_format, max_tokens = PROMPTS[kind]
    client = get_chat_client()
    try:
        response = await client.chat.completions.create(
            model=OPENAI_MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": f"{prompt}\n{response_format}"},
            ],
            temperature=0.3,
            max_tokens=max_tokens,
        )
    except OpenAIError as e:
        logger.error("OpenAI %s request failed: %s", kind, e)
        raise AIRequestError(f"Failed to generate {kind}: {e}") from e

    content = response.choices[0].message.content
    return (content or "").strip()
