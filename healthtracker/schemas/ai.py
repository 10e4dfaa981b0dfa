# schemas/ai.py
from pydantic import BaseModel

MIN_PROMPT_LENGTH = 50


class PromptRequest(BaseModel):
    # 길이 검사는 라우터에서 {success, message} 형태로 응답하기 위해 직접 수행
    prompt: str = ""
