# utils/ai_relay.py
# 플랜 생성 요청을 백엔드 프록시(relay)로 보내는 클라이언트. requests 는 동기이므로 스레드풀에서 실행
import logging

import requests
from fastapi.concurrency import run_in_threadpool

from ..core.config import AI_RELAY_URL, AI_RELAY_TOKEN, AI_RELAY_TIMEOUT
from ..core.errors import RelayError

logger = logging.getLogger(__name__)

RELAY_ENDPOINTS = {
    "diet": "generate-diet-plan",
    "workout": "generate-workout-plan",
    "recommendations": "generate-recommendations",
}


def _post(kind: str, prompt: str) -> dict:
    if not AI_RELAY_URL:
        raise RelayError("AI relay URL not configured")

    url = f"{AI_RELAY_URL.rstrip('/')}/{RELAY_ENDPOINTS[kind]}"
    headers = {"Content-Type": "application/json"}
    if AI_RELAY_TOKEN:
        headers["Authorization"] = f"Bearer {AI_RELAY_TOKEN}"

    try:
        response = requests.post(url, headers=headers, json={"prompt": prompt}, timeout=AI_RELAY_TIMEOUT)
    except requests.RequestException as e:
        raise RelayError(f"AI relay request failed: {e}") from e

    if not response.ok:
        raise RelayError(f"AI relay returned HTTP {response.status_code}")

    try:
        body = response.json()
    except ValueError as e:
        raise RelayError("AI relay returned a non-JSON body") from e

    if not body.get("success") or body.get("data") is None:
        raise RelayError(body.get("message") or f"Failed to generate {kind}")
    return body["data"]


async def request_generation(kind: str, prompt: str) -> dict:
    logger.debug("relay request kind=%s prompt_chars=%d", kind, len(prompt))
    return await run_in_threadpool(_post, kind, prompt)
