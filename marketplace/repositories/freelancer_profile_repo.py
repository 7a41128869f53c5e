# marketplace/repositories/freelancer_profile_repo.py
import logging
import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy import and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from marketplace.models.freelancer_profile import (
    FreelancerProfile, FreelancerSkill, FreelancerCategory, PortfolioItem, FreelancerReview
)

logger = logging.getLogger(__name__)

# 這些欄位不是 Profile 的欄位，而是子表
_SKILL_FIELDS = {"primary_skills": "primary", "secondary_skills": "secondary"}
_CATEGORY_FIELD = "categories"


class FreelancerProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        # 明確指定 Eager Loading，並用 populate_existing 覆蓋 session 中的舊資料
        return (
            select(FreelancerProfile)
            .options(
                selectinload(FreelancerProfile.user),
                selectinload(FreelancerProfile.skill_entries),
                selectinload(FreelancerProfile.category_entries),
                selectinload(FreelancerProfile.portfolio),
                selectinload(FreelancerProfile.reviews),
            )
            .execution_options(populate_existing=True)
        )

    async def get_by_user_id(self, user_id: str) -> FreelancerProfile | None:
        stmt = self._base_query().where(FreelancerProfile.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_by_profile_id(self, profile_id: str) -> FreelancerProfile | None:
        stmt = self._base_query().where(FreelancerProfile.profile_id == profile_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    def _apply_fields(self, profile: FreelancerProfile, data: Dict[str, Any]) -> None:
        """
        把 Upsert 的 dict 寫進 Profile。
        技能 / 類別列表會整批取代子表資料。
        """
        for key, value in data.items():
            if key in _SKILL_FIELDS:
                kind = _SKILL_FIELDS[key]
                kept = [s for s in profile.skill_entries if s.kind != kind]
                profile.skill_entries = kept + [
                    FreelancerSkill(skill_id=str(uuid.uuid4()), kind=kind, name=name)
                    for name in dict.fromkeys(value or [])
                ]
            elif key == _CATEGORY_FIELD:
                profile.category_entries = [
                    FreelancerCategory(category_id=str(uuid.uuid4()), name=name)
                    for name in dict.fromkeys(value or [])
                ]
            else:
                setattr(profile, key, value)

    async def create_profile(self, user_id: str, data: Dict[str, Any]) -> FreelancerProfile:
        new_profile = FreelancerProfile(
            profile_id=str(uuid.uuid4()),
            user_id=user_id,
            skill_entries=[],
            category_entries=[],
        )
        self._apply_fields(new_profile, data)
        self.db.add(new_profile)
        await self.db.commit()
        return await self.get_by_user_id(user_id)

    async def update_profile(self, profile: FreelancerProfile, data: Dict[str, Any]) -> FreelancerProfile:
        self._apply_fields(profile, data)
        await self.db.commit()
        return await self.get_by_user_id(profile.user_id)

    # --- 作品集 ---
    async def add_portfolio_item(self, profile: FreelancerProfile, data: Dict[str, Any]) -> FreelancerProfile:
        profile.portfolio.append(PortfolioItem(item_id=str(uuid.uuid4()), **data))
        await self.db.commit()
        return await self.get_by_user_id(profile.user_id)

    async def update_portfolio_item(
        self, profile: FreelancerProfile, item: PortfolioItem, data: Dict[str, Any]
    ) -> FreelancerProfile:
        for key, value in data.items():
            setattr(item, key, value)
        await self.db.commit()
        return await self.get_by_user_id(profile.user_id)

    async def delete_portfolio_item(self, profile: FreelancerProfile, item: PortfolioItem) -> FreelancerProfile:
        # delete-orphan 會在 flush 時刪除該列
        profile.portfolio.remove(item)
        await self.db.commit()
        return await self.get_by_user_id(profile.user_id)

    # --- 評價 ---
    async def add_review(self, profile: FreelancerProfile, data: Dict[str, Any]) -> FreelancerProfile:
        review = FreelancerReview(review_id=str(uuid.uuid4()), **data)
        profile.reviews.append(review)
        await self.db.commit()
        return await self.get_by_profile_id(profile.profile_id)

    # --- 搜尋 ---
    async def search_profiles(
        self,
        skills: Optional[List[str]] = None,
        location: Optional[str] = None,
        min_rate: Optional[float] = None,
        max_rate: Optional[float] = None,
        categories: Optional[List[str]] = None,
        limit: int = 20,
    ) -> List[FreelancerProfile]:
        """
        依條件複合式搜尋工作者
        1. 技能 (skills): 主要技能任一符合 (OR 邏輯)
        2. 地區 (location): 不分大小寫的部分比對
        3. 時薪 (min_rate / max_rate): 閉區間
        4. 類別 (categories): 任一符合
        """
        stmt = self._base_query()

        if skills:
            stmt = stmt.where(
                FreelancerProfile.skill_entries.any(
                    and_(FreelancerSkill.kind == 'primary', FreelancerSkill.name.in_(skills))
                )
            )

        if location:
            stmt = stmt.where(FreelancerProfile.location.icontains(location, autoescape=True))

        if min_rate is not None:
            stmt = stmt.where(FreelancerProfile.hourly_rate >= min_rate)
        if max_rate is not None:
            stmt = stmt.where(FreelancerProfile.hourly_rate <= max_rate)

        if categories:
            stmt = stmt.where(
                FreelancerProfile.category_entries.any(FreelancerCategory.name.in_(categories))
            )

        stmt = stmt.order_by(FreelancerProfile.created_at, FreelancerProfile.profile_id).limit(limit)

        logger.info(
            "Searching freelancers: skills=%s location=%s rate=[%s, %s] categories=%s",
            skills, location, min_rate, max_rate, categories
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
