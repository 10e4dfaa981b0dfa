# healthtracker/dependencies.py

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from .crud.user import get_user_by_id
from .utils.jwt_handler import verify_token, token_expired, credentials_exception, expired_exception

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


async def get_current_user(token: str = Depends(oauth2_scheme)) -> dict:
    # 만료된 토큰은 일반 인증 실패와 구분해서 알려줌
    if token_expired(token):
        raise expired_exception
    user_id = verify_token(token)
    try:
        user = await get_user_by_id(int(user_id))
    except ValueError:
        raise credentials_exception
    if user is None:
        raise credentials_exception
    if not user["is_active"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated.")
    return user
