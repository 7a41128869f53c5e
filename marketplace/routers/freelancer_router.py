# marketplace/routers/freelancer_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.database import get_db
from marketplace.core.security import get_active_token_data, require_roles
from marketplace.schemas.user_schema import TokenData
from marketplace.services.freelancer_profile_service import FreelancerProfileService
from marketplace.schemas.freelancer_profile_schema import (
    FreelancerProfileUpsert, FreelancerProfileResponse,
    PortfolioItemCreate, PortfolioItemUpdate, PortfolioResponse,
    FreelancerReviewCreate, FreelancerReviewsResponse,
    FreelancerSearchResponse,
)

router = APIRouter(
    prefix="/freelancer",
    tags=["Freelancer Profiles"],
    # 整個模組都需要登入
    dependencies=[Depends(get_active_token_data)]
)

# 僅限自由工作者的路由
freelancer_only = require_roles("freelancer")


def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """'a, b,,c' -> ['a', 'b', 'c']；空字串視為未提供"""
    if not value:
        return None
    items = [part.strip() for part in value.split(",") if part.strip()]
    return items or None


@router.api_route(
    "/profile",
    methods=["POST", "PUT"],
    response_model=FreelancerProfileResponse,
)
async def upsert_my_profile(
    profile_data: FreelancerProfileUpsert,
    response: Response,
    token_data: TokenData = Depends(freelancer_only),
    db: AsyncSession = Depends(get_db)
):
    """
    建立或更新自己的工作者 Profile。
    第一次呼叫回傳 201，之後回傳 200。
    """
    service = FreelancerProfileService(db)
    profile, created = await service.upsert_profile(token_data.user_id, profile_data)

    if created:
        response.status_code = status.HTTP_201_CREATED
        return {"message": "Profile created successfully", "profile": profile}
    return {"message": "Profile updated successfully", "profile": profile}


@router.get("/profile/me", response_model=FreelancerProfileResponse)
async def get_my_profile(
    token_data: TokenData = Depends(freelancer_only),
    db: AsyncSession = Depends(get_db)
):
    service = FreelancerProfileService(db)
    profile = await service.get_my_profile(token_data.user_id)
    return {"message": "Profile fetched successfully", "profile": profile}


@router.get("/profile/user/{user_id}", response_model=FreelancerProfileResponse)
async def get_profile_by_user_id(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    """獲取指定 User ID 的工作者 Profile"""
    service = FreelancerProfileService(db)
    profile = await service.get_profile_by_user_id(user_id)
    return {"message": "Profile fetched successfully", "profile": profile}


@router.get("/profile/{profile_id}", response_model=FreelancerProfileResponse)
async def get_profile(
    profile_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = FreelancerProfileService(db)
    profile = await service.get_profile(profile_id)
    return {"message": "Profile fetched successfully", "profile": profile}


# --- 作品集 (僅限自由工作者) ---
@router.post("/portfolio", response_model=PortfolioResponse)
async def add_portfolio_item(
    item_data: PortfolioItemCreate,
    token_data: TokenData = Depends(freelancer_only),
    db: AsyncSession = Depends(get_db)
):
    service = FreelancerProfileService(db)
    portfolio = await service.add_portfolio_item(token_data.user_id, item_data)
    return {"message": "Portfolio item added successfully", "portfolio": portfolio}


@router.put("/portfolio/{item_id}", response_model=PortfolioResponse)
async def update_portfolio_item(
    item_id: str,
    update_data: PortfolioItemUpdate,
    token_data: TokenData = Depends(freelancer_only),
    db: AsyncSession = Depends(get_db)
):
    """只更新有傳入的欄位"""
    service = FreelancerProfileService(db)
    portfolio = await service.update_portfolio_item(token_data.user_id, item_id, update_data)
    return {"message": "Portfolio item updated successfully", "portfolio": portfolio}


@router.delete("/portfolio/{item_id}", response_model=PortfolioResponse)
async def delete_portfolio_item(
    item_id: str,
    token_data: TokenData = Depends(freelancer_only),
    db: AsyncSession = Depends(get_db)
):
    service = FreelancerProfileService(db)
    portfolio = await service.delete_portfolio_item(token_data.user_id, item_id)
    return {"message": "Portfolio item deleted successfully", "portfolio": portfolio}


# --- 評價 (任何已登入者) ---
@router.post("/profile/{profile_id}/review", response_model=FreelancerReviewsResponse)
async def add_review(
    profile_id: str,
    review_data: FreelancerReviewCreate,
    db: AsyncSession = Depends(get_db)
):
    service = FreelancerProfileService(db)
    reviews = await service.add_review(profile_id, review_data)
    return {"message": "Review added successfully", "reviews": reviews}


# --- 搜尋 ---
@router.get("/search", response_model=FreelancerSearchResponse)
async def search_freelancers(
    db: AsyncSession = Depends(get_db),
    skills: Optional[str] = Query(None, description="以逗號分隔的主要技能"),
    location: Optional[str] = Query(None, description="地區 (不分大小寫部分比對)"),
    min_rate: Optional[float] = Query(None, alias="minRate", ge=0),
    max_rate: Optional[float] = Query(None, alias="maxRate", ge=0),
    category: Optional[str] = Query(None, description="以逗號分隔的類別"),
):
    """
    依技能、地區、時薪區間、類別搜尋工作者，最多回傳 20 筆 (無分頁)。
    """
    service = FreelancerProfileService(db)
    profiles = await service.search_freelancers(
        skills=_split_csv(skills),
        location=location or None,
        min_rate=min_rate,
        max_rate=max_rate,
        categories=_split_csv(category),
    )
    return {"message": "Search completed", "count": len(profiles), "profiles": profiles}
