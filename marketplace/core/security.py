# marketplace/core/security.py
# 負責密碼雜湊、JWT 權杖的產生與驗證，以及角色檢查
from datetime import datetime, timedelta, timezone
from typing import Callable
from passlib.context import CryptContext
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.core.config import settings
from marketplace.core.database import get_db
from marketplace.schemas.user_schema import TokenData
from marketplace.repositories.user_repo import UserRepository
from marketplace.models.user import User

import logging

logger = logging.getLogger(__name__)

# 1. 密碼雜湊設定 (Bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# 2. 定義 Token 從哪裡來 (Authorization: Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/user/token")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """驗證明文密碼是否與雜湊值相符"""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """產生密碼的雜湊值"""
    return pwd_context.hash(password)

def create_access_token(data: dict) -> str:
    """
    根據傳入的 data (user_id, role) 產生 JWT access token
    """
    to_encode = data.copy() # 避免修改原始資料
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )

def verify_access_token(token: str) -> TokenData | None:
    """
    驗證 JWT，回傳 TokenData 或 None
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    user_id = payload.get("user_id")
    role = payload.get("role")
    if user_id is None or role is None:
        return None

    return TokenData(user_id=user_id, role=role)

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

async def get_token_data(token: str = Depends(oauth2_scheme)) -> TokenData:
    """
    FastAPI 依賴項：只驗證 Token，回傳 TokenData (user_id + role)。
    不查詢資料庫；是否存在該使用者由 Service 層判斷。
    """
    token_data = verify_access_token(token)
    if token_data is None:
        raise _credentials_exception()
    return token_data

async def get_active_token_data(
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
) -> TokenData:
    """
    FastAPI 依賴項：驗證 Token，並擋下已停用的帳號 (與 /user/me 相同的 400)。
    Token 對應的使用者不存在時放行，交給 Service 回傳 404。
    """
    user = await UserRepository(db).get_user_by_id(user_id=token_data.user_id)
    if user is not None and not user.is_active:
        logger.warning("Rejected token of deactivated user %s", token_data.user_id)
        raise HTTPException(status_code=400, detail="This account has been deactivated")
    return token_data

def require_roles(*roles: str) -> Callable:
    """
    產生角色檢查的依賴項，例如 Depends(require_roles("freelancer"))。
    角色不符時回傳 403，且不會進入 Service。
    """
    async def role_checker(token_data: TokenData = Depends(get_active_token_data)) -> TokenData:
        if token_data.role not in roles:
            logger.warning(
                "Role check failed for user %s: has %s, needs %s",
                token_data.user_id, token_data.role, roles
            )
            raise HTTPException(
                status.HTTP_403_FORBIDDEN,
                f"Access denied. Required role: {', '.join(roles)}"
            )
        return token_data

    return role_checker

async def get_current_user(
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    FastAPI 依賴項：驗證 Token 並回傳 User Model
    """
    user_repo = UserRepository(db)
    user = await user_repo.get_user_by_id(user_id=token_data.user_id)

    if user is None:
        raise _credentials_exception()

    if not user.is_active:
        raise HTTPException(status_code=400, detail="This account has been deactivated")

    return user
