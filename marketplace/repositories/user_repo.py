# marketplace/repositories/user_repo.py
# 負責與使用者相關的資料庫操作
import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from marketplace.models.user import User, UserRoleEnum

class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        """透過 email 查詢使用者 (不分大小寫)"""
        stmt = select(User).where(User.email == email.lower())
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_user_by_id(self, user_id: str) -> User | None:
        stmt = select(User).where(User.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_user(
        self, name: str, email: str, password_hash: str, role: UserRoleEnum
    ) -> User:
        """新增使用者，user_id 由這裡產生 UUID"""
        new_user = User(
            user_id=str(uuid.uuid4()),
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            role=role,
            is_active=True,
        )
        self.db.add(new_user)
        await self.db.commit()
        await self.db.refresh(new_user)
        return new_user
