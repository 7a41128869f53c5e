# marketplace/routers/user_router.py
from fastapi import APIRouter, Depends
from marketplace.core.security import get_current_user
from marketplace.models.user import User
from marketplace.schemas.user_schema import UserOut

router = APIRouter(
    prefix="/user",
    tags=["Users"],
)

@router.get("/me", response_model=UserOut)
async def read_users_me(
    current_user: User = Depends(get_current_user)
):
    """獲取當前登入使用者的基本資料 (不含密碼)"""
    return current_user
