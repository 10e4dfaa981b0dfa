# healthtracker/utils/jwt_handler.py

from datetime import timedelta
from jose import JWTError, jwt
from fastapi import HTTPException, status

from ..core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from . import clock


# 토큰 생성 함수
def create_access_token(data: dict, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES):
    to_encode = data.copy()
    expire = clock.utcnow() + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def create_user_token(user: dict) -> str:
    return create_access_token({
        "sub": str(user["id"]),
        "email": user["email"],
        "username": user["username"],
    })


# 토큰 검증 함수
def verify_token(token: str) -> str:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
        return user_id
    except JWTError:
        raise credentials_exception


def token_expired(token: str) -> bool:
    """서명 검증 없이 payload 만 디코딩해서 만료 여부를 확인합니다."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        # 형식이 깨진 토큰은 만료가 아니라 검증 실패로 처리
        return False
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return False
    return clock.utcnow().timestamp() >= exp


# 인증 실패 예외
credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials.",
    headers={"WWW-Authenticate": "Bearer"},
)

expired_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Session expired. Please log in again.",
    headers={"WWW-Authenticate": "Bearer"},
)
