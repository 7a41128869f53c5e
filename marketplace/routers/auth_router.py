import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.core.database import get_db
from marketplace.services.auth_service import AuthService
from marketplace.schemas.user_schema import (
    Token, UserCreate, UserLogin, RegisterResponse, LoginResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/user", # 前端表單呼叫 /user/register, /user/login
    tags=["Auth"]
)

def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid email or password",
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register_new_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    註冊新使用者 (freelancer / client / admin / user)

    - 密碼至少 6 碼。
    """
    auth_service = AuthService(db)
    new_user = await auth_service.register_user(user_data)
    return {"message": "User registered successfully", "user": new_user}


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """
    JSON 登入 (前端 Sign-in 表單使用)，回傳 token 與使用者資料
    """
    auth_service = AuthService(db)
    user = await auth_service.authenticate_user(
        email=credentials.email,
        password=credentials.password
    )
    if not user:
        raise _invalid_credentials()

    logger.info("User logged in: %s", user.user_id)
    return {
        "message": "Login successful",
        "token": auth_service.create_login_token(user),
        "user": user,
    }


@router.post("/token", response_model=Token)
async def login_for_access_token(
    # OAuth2PasswordRequestForm 只接受 form-data: username=...&password=...
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db)
):
    """
    提供帳號 (username 欄位傳 email) 和密碼以取得 Access Token (Swagger Authorize 用)
    """
    auth_service = AuthService(db)
    user = await auth_service.authenticate_user(
        email=form_data.username,
        password=form_data.password
    )
    if not user:
        raise _invalid_credentials()

    return {"access_token": auth_service.create_login_token(user), "token_type": "bearer"}
