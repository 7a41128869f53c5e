# models/user.py
from sqlalchemy import Column, String, Boolean, Enum, CHAR
from sqlalchemy.orm import relationship
from marketplace.core.database import Base
import enum

class UserRoleEnum(str, enum.Enum):
    freelancer = "freelancer"
    client = "client"
    admin = "admin"
    user = "user"

class User(Base):
    __tablename__ = "users"

    # 基本欄位
    user_id = Column(CHAR(36), primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRoleEnum, values_callable=lambda obj: [e.value for e in obj]), nullable=False, default=UserRoleEnum.user)
    is_active = Column(Boolean, default=True)

    # 1-to-1 關聯 (每個 User 最多一份工作者 / 客戶 Profile)
    freelancer_profile = relationship(
        "FreelancerProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )

    client_profile = relationship(
        "ClientProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )
