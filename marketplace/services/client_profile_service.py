# marketplace/services/client_profile_service.py
import logging
from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from marketplace.models.client_profile import ClientProfile, ClientActiveJob
from marketplace.repositories.client_profile_repo import ClientProfileRepository
from marketplace.repositories.user_repo import UserRepository
from marketplace.schemas.client_profile_schema import (
    ClientProfileUpsert, ActiveJobCreate, ClientReviewCreate, PaymentHistoryCreate
)

logger = logging.getLogger(__name__)

PROFILE_NOT_FOUND = "Profile not found"
CREATE_PROFILE_FIRST = "Profile not found. Please create your profile first."


class ClientProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = ClientProfileRepository(db)
        self.user_repo = UserRepository(db)

    async def upsert_profile(
        self, user_id: str, profile_data: ClientProfileUpsert
    ) -> Tuple[ClientProfile, bool]:
        """建立或更新自己的客戶 Profile，回傳 (profile, 是否為新建立)"""
        user = await self.user_repo.get_user_by_id(user_id)
        if not user:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

        data = profile_data.model_dump(exclude_unset=True, exclude_none=True)

        profile = await self.repo.get_by_user_id(user_id)
        if profile:
            return await self.repo.update_profile(profile, data), False

        if not data.get("name"):
            raise HTTPException(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                {
                    "message": "Failed to create/update profile",
                    "error": "Client profile validation failed: name is required",
                },
            )

        profile = await self.repo.create_profile(user_id, data)
        logger.info("Created client profile %s for user %s", profile.profile_id, user_id)
        return profile, True

    async def get_profile(self, profile_id: str) -> ClientProfile:
        profile = await self.repo.get_by_profile_id(profile_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, PROFILE_NOT_FOUND)
        return profile

    async def get_profile_by_user_id(self, user_id: str) -> ClientProfile:
        profile = await self.repo.get_by_user_id(user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, PROFILE_NOT_FOUND)
        return profile

    async def get_my_profile(self, user_id: str) -> ClientProfile:
        profile = await self.repo.get_by_user_id(user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, CREATE_PROFILE_FIRST)
        return profile

    # --- 案件管理 ---
    async def add_active_job(self, user_id: str, job_data: ActiveJobCreate) -> List[ClientActiveJob]:
        profile = await self.get_my_profile(user_id)
        profile = await self.repo.add_active_job(profile, job_data.model_dump())
        return profile.active_jobs

    async def update_job_status(self, user_id: str, job_id: str, new_status: str) -> ClientProfile:
        """
        更新進行中案件的狀態。
        狀態為 'Completed' 時，把案件從 active_jobs 移到 past_jobs。
        """
        profile = await self.get_profile_by_user_id(user_id)

        job = next((j for j in profile.active_jobs if j.job_id == job_id), None)
        if job is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Job not found")

        job.status = new_status
        if new_status == "Completed":
            logger.info("Job %s completed, moving to past jobs (profile %s)", job_id, profile.profile_id)
            return await self.repo.move_job_to_past(profile, job)

        return await self.repo.save(profile)

    # --- 收藏工作者 (集合語意) ---
    async def add_saved_freelancer(self, user_id: str, freelancer_name: str) -> List[str]:
        profile = await self.get_my_profile(user_id)
        saved = list(profile.saved_freelancers or [])
        if freelancer_name not in saved:
            # JSON 欄位要重新指定整個 list，SQLAlchemy 才會偵測到變更
            profile.saved_freelancers = saved + [freelancer_name]
            profile = await self.repo.save(profile)
        return profile.saved_freelancers

    async def remove_saved_freelancer(self, user_id: str, freelancer_name: str) -> List[str]:
        profile = await self.get_profile_by_user_id(user_id)
        profile.saved_freelancers = [
            name for name in (profile.saved_freelancers or []) if name != freelancer_name
        ]
        profile = await self.repo.save(profile)
        return profile.saved_freelancers

    # --- 評價工作者 ---
    async def add_freelancer_review(self, user_id: str, review_data: ClientReviewCreate):
        profile = await self.get_my_profile(user_id)
        profile = await self.repo.add_review(profile, review_data.model_dump(exclude_none=True))
        return profile.reviews

    # --- 付款 ---
    async def add_payment_method(self, user_id: str, method: str) -> List[str]:
        profile = await self.get_my_profile(user_id)
        methods = list(profile.payment_methods or [])
        if method not in methods:
            profile.payment_methods = methods + [method]
            profile = await self.repo.save(profile)
        return profile.payment_methods

    async def add_payment_history(self, user_id: str, payment_data: PaymentHistoryCreate):
        profile = await self.get_my_profile(user_id)
        profile = await self.repo.add_payment(profile, payment_data.model_dump(exclude_none=True))
        return profile.payment_history
