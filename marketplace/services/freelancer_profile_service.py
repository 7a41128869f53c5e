# marketplace/services/freelancer_profile_service.py
import logging
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from marketplace.core.config import settings
from marketplace.models.freelancer_profile import FreelancerProfile, PortfolioItem
from marketplace.models.user import UserRoleEnum
from marketplace.repositories.freelancer_profile_repo import FreelancerProfileRepository
from marketplace.repositories.user_repo import UserRepository
from marketplace.schemas.freelancer_profile_schema import (
    FreelancerProfileUpsert, PortfolioItemCreate, PortfolioItemUpdate, FreelancerReviewCreate
)

logger = logging.getLogger(__name__)

PROFILE_NOT_FOUND = "Profile not found"
CREATE_PROFILE_FIRST = "Profile not found. Please create your profile first."


class FreelancerProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = FreelancerProfileRepository(db)
        self.user_repo = UserRepository(db)

    async def upsert_profile(
        self, user_id: str, profile_data: FreelancerProfileUpsert
    ) -> Tuple[FreelancerProfile, bool]:
        """
        建立或更新自己的工作者 Profile。
        回傳 (profile, 是否為新建立)。
        """
        user = await self.user_repo.get_user_by_id(user_id)
        if not user:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

        if user.role != UserRoleEnum.freelancer:
            raise HTTPException(
                status.HTTP_403_FORBIDDEN,
                "Only freelancers can create/update freelancer profiles"
            )

        data = profile_data.model_dump(mode="json", exclude_unset=True, exclude_none=True)

        profile = await self.repo.get_by_user_id(user_id)
        if profile:
            logger.info("Updating freelancer profile %s (fields: %s)", profile.profile_id, sorted(data))
            return await self.repo.update_profile(profile, data), False

        profile = await self.repo.create_profile(user_id, data)
        logger.info("Created freelancer profile %s for user %s", profile.profile_id, user_id)
        return profile, True

    async def get_profile(self, profile_id: str) -> FreelancerProfile:
        profile = await self.repo.get_by_profile_id(profile_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, PROFILE_NOT_FOUND)
        return profile

    async def get_profile_by_user_id(self, user_id: str) -> FreelancerProfile:
        profile = await self.repo.get_by_user_id(user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, PROFILE_NOT_FOUND)
        return profile

    async def get_my_profile(self, user_id: str) -> FreelancerProfile:
        profile = await self.repo.get_by_user_id(user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, CREATE_PROFILE_FIRST)
        return profile

    # --- 作品集 ---
    def _find_portfolio_item(self, profile: FreelancerProfile, item_id: str) -> PortfolioItem:
        for item in profile.portfolio:
            if item.item_id == item_id:
                return item
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Portfolio item not found")

    async def add_portfolio_item(self, user_id: str, item_data: PortfolioItemCreate) -> List[PortfolioItem]:
        profile = await self.get_my_profile(user_id)
        profile = await self.repo.add_portfolio_item(profile, item_data.model_dump())
        logger.info("Added portfolio item to profile %s", profile.profile_id)
        return profile.portfolio

    async def update_portfolio_item(
        self, user_id: str, item_id: str, update_data: PortfolioItemUpdate
    ) -> List[PortfolioItem]:
        profile = await self.get_profile_by_user_id(user_id)
        item = self._find_portfolio_item(profile, item_id)
        data = update_data.model_dump(exclude_unset=True, exclude_none=True)
        profile = await self.repo.update_portfolio_item(profile, item, data)
        return profile.portfolio

    async def delete_portfolio_item(self, user_id: str, item_id: str) -> List[PortfolioItem]:
        profile = await self.get_profile_by_user_id(user_id)
        # 找不到就 404，作品集維持原樣
        item = self._find_portfolio_item(profile, item_id)
        profile = await self.repo.delete_portfolio_item(profile, item)
        logger.info("Deleted portfolio item %s from profile %s", item_id, profile.profile_id)
        return profile.portfolio

    # --- 評價 ---
    async def add_review(self, profile_id: str, review_data: FreelancerReviewCreate):
        """任何已登入的使用者都可以對存在的 Profile 留下評價"""
        profile = await self.get_profile(profile_id)
        profile = await self.repo.add_review(profile, review_data.model_dump(exclude_none=True))
        return profile.reviews

    # --- 搜尋 ---
    async def search_freelancers(
        self,
        skills: Optional[List[str]] = None,
        location: Optional[str] = None,
        min_rate: Optional[float] = None,
        max_rate: Optional[float] = None,
        categories: Optional[List[str]] = None,
    ) -> List[FreelancerProfile]:
        return await self.repo.search_profiles(
            skills=skills,
            location=location,
            min_rate=min_rate,
            max_rate=max_rate,
            categories=categories,
            limit=settings.SEARCH_RESULT_LIMIT,
        )
