# core/errors.py
# AI 플랜 생성 경로에서 발생하는 예외. 라우터에서 HTTPException 으로 변환


class PlanGenerationError(Exception):
    """AI 플랜 생성 실패의 공통 부모 클래스."""

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AIConfigurationError(PlanGenerationError):
    status_code = 500


class RelayError(PlanGenerationError):
    pass


class AIRequestError(PlanGenerationError):
    pass


class PlanParseError(PlanGenerationError):
    pass
