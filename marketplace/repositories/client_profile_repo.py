# marketplace/repositories/client_profile_repo.py
import uuid
from datetime import datetime
from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from marketplace.models.client_profile import (
    ClientProfile, ClientActiveJob, ClientPastJob, ClientReview, ClientPayment
)


class ClientProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return (
            select(ClientProfile)
            .options(
                selectinload(ClientProfile.user),
                selectinload(ClientProfile.active_jobs),
                selectinload(ClientProfile.past_jobs),
                selectinload(ClientProfile.reviews),
                selectinload(ClientProfile.payment_history),
            )
            .execution_options(populate_existing=True)
        )

    async def get_by_user_id(self, user_id: str) -> ClientProfile | None:
        stmt = self._base_query().where(ClientProfile.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_by_profile_id(self, profile_id: str) -> ClientProfile | None:
        stmt = self._base_query().where(ClientProfile.profile_id == profile_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_profile(self, user_id: str, data: Dict[str, Any]) -> ClientProfile:
        new_profile = ClientProfile(
            **data,
            profile_id=str(uuid.uuid4()),
            user_id=user_id
        )
        self.db.add(new_profile)
        await self.db.commit()
        return await self.get_by_user_id(user_id)

    async def update_profile(self, profile: ClientProfile, data: Dict[str, Any]) -> ClientProfile:
        """只更新有傳入的欄位"""
        for key, value in data.items():
            setattr(profile, key, value)
        await self.db.commit()
        return await self.get_by_user_id(profile.user_id)

    async def save(self, profile: ClientProfile) -> ClientProfile:
        """提交 Service 在 Profile 上做的修改，並重新讀取"""
        await self.db.commit()
        return await self.get_by_user_id(profile.user_id)

    # --- 案件管理 ---
    async def add_active_job(self, profile: ClientProfile, data: Dict[str, Any]) -> ClientProfile:
        profile.active_jobs.append(ClientActiveJob(job_id=str(uuid.uuid4()), **data))
        return await self.save(profile)

    async def move_job_to_past(self, profile: ClientProfile, job: ClientActiveJob) -> ClientProfile:
        """
        將已完成的案件從 active_jobs 移到 past_jobs。
        新增與刪除在同一個 commit 內，不會出現重複或遺失的案件。
        """
        profile.past_jobs.append(
            ClientPastJob(
                job_id=str(uuid.uuid4()),
                title=job.title,
                freelancer=job.freelancer,
                status='Completed',
                date=datetime.now(),
            )
        )
        profile.active_jobs.remove(job)
        return await self.save(profile)

    # --- 評價 / 付款紀錄 ---
    async def add_review(self, profile: ClientProfile, data: Dict[str, Any]) -> ClientProfile:
        profile.reviews.append(ClientReview(review_id=str(uuid.uuid4()), **data))
        return await self.save(profile)

    async def add_payment(self, profile: ClientProfile, data: Dict[str, Any]) -> ClientProfile:
        profile.payment_history.append(ClientPayment(payment_id=str(uuid.uuid4()), **data))
        return await self.save(profile)
