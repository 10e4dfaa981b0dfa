# utils/security.py
import hashlib
import secrets

import bcrypt

from ..core.config import BCRYPT_ROUNDS


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def generate_reset_token() -> tuple[str, str]:
    """(메일로 보낼 원본 토큰, DB 에 저장할 해시) 를 반환합니다."""
    raw_token = secrets.token_hex(32)
    return raw_token, hash_reset_token(raw_token)
