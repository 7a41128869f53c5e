# marketplace/models/freelancer_profile.py
from datetime import datetime
from sqlalchemy import (
    Column, String, TEXT, ForeignKey, JSON, DECIMAL, CHAR, Enum, INT, Boolean, TIMESTAMP
)
from sqlalchemy.orm import relationship
from marketplace.core.database import Base

VerificationBadgeEnum = Enum(
    'ID verified', 'skill verified', 'unverified',
    name="freelancer_verification_enum"
)
AvailabilityStatusEnum = Enum(
    'Available', 'Busy', 'Unavailable',
    name="freelancer_availability_enum"
)
MediaTypeEnum = Enum('image', 'video', name="portfolio_media_type_enum")
SkillKindEnum = Enum('primary', 'secondary', name="freelancer_skill_kind_enum")

class FreelancerProfile(Base):
    __tablename__ = "freelancer_profiles"

    profile_id = Column(CHAR(36), primary_key=True)
    # 每個 User 只能有一份工作者 Profile
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    # --- 個人資料 ---
    profile_photo = Column(String(500), default="")
    location = Column(String(255), default="", index=True)
    bio = Column(TEXT, default="")
    languages = Column(JSON, default=list)
    verification_badge = Column(VerificationBadgeEnum, default='unverified')

    # --- 技能 (primary/secondary/categories 存在子表，方便搜尋) ---
    years_of_experience = Column(INT, default=0)

    # --- 價格 ---
    hourly_rate = Column(DECIMAL(10, 2), default=0, index=True)
    per_job_rate = Column(DECIMAL(10, 2), default=0)
    currency = Column(String(10), default="USD")
    negotiable = Column(Boolean, default=True)

    # --- 檔期 ---
    calendar = Column(JSON, default=list) # ISO 日期字串列表
    availability_status = Column(AvailabilityStatusEnum, default='Available')
    max_jobs_per_day = Column(INT, default=1)

    # --- 聯絡方式 ---
    message_enabled = Column(Boolean, default=True)
    hire_enabled = Column(Boolean, default=True)
    social_links = Column(JSON, default=dict) # {"instagram": ..., "linkedin": ...}

    # --- 其他資訊 ---
    equipment = Column(JSON, default=list)
    specializations = Column(JSON, default=list)
    certifications = Column(JSON, default=list)

    # --- 隱私 / 通知設定 ---
    show_contact_info = Column(Boolean, default=True)
    notify_booking_requests = Column(Boolean, default=True)
    notify_messages = Column(Boolean, default=True)

    # --- 額外選項 ---
    intro_video = Column(String(500), default="")
    urgent_availability = Column(Boolean, default=False)
    badges = Column(JSON, default=list)

    created_at = Column(TIMESTAMP, default=datetime.now)
    updated_at = Column(TIMESTAMP, default=datetime.now, onupdate=datetime.now)

    # 1-to-1 反向關聯到 User
    user = relationship("User", back_populates="freelancer_profile", lazy="selectin")

    skill_entries = relationship(
        "FreelancerSkill",
        back_populates="profile",
        cascade="all, delete-orphan",
        lazy="selectin"
    )
    category_entries = relationship(
        "FreelancerCategory",
        back_populates="profile",
        cascade="all, delete-orphan",
        lazy="selectin"
    )
    portfolio = relationship(
        "PortfolioItem",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="PortfolioItem.created_at",
        lazy="selectin"
    )
    reviews = relationship(
        "FreelancerReview",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="FreelancerReview.date",
        lazy="selectin"
    )

    # Pydantic (from_attributes) 直接讀這些屬性
    @property
    def primary_skills(self) -> list[str]:
        return [s.name for s in self.skill_entries if s.kind == 'primary']

    @property
    def secondary_skills(self) -> list[str]:
        return [s.name for s in self.skill_entries if s.kind == 'secondary']

    @property
    def categories(self) -> list[str]:
        return [c.name for c in self.category_entries]


class FreelancerSkill(Base):
    __tablename__ = "freelancer_skills"

    skill_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("freelancer_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    kind = Column(SkillKindEnum, nullable=False, default='primary')
    name = Column(String(100), nullable=False, index=True)

    profile = relationship("FreelancerProfile", back_populates="skill_entries")


class FreelancerCategory(Base):
    __tablename__ = "freelancer_categories"

    category_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("freelancer_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)

    profile = relationship("FreelancerProfile", back_populates="category_entries")


class PortfolioItem(Base):
    __tablename__ = "portfolio_items"

    item_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("freelancer_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    media_type = Column(MediaTypeEnum, nullable=False)
    url = Column(String(500), nullable=False)
    tags = Column(JSON, default=list)
    created_at = Column(TIMESTAMP, default=datetime.now)

    profile = relationship("FreelancerProfile", back_populates="portfolio")


class FreelancerReview(Base):
    __tablename__ = "freelancer_reviews"

    review_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("freelancer_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    client_name = Column(String(100), nullable=False)
    rating = Column(INT, nullable=False) # 1 ~ 5，由 Schema 驗證
    comment = Column(TEXT, nullable=False)
    date = Column(TIMESTAMP, default=datetime.now)

    profile = relationship("FreelancerProfile", back_populates="reviews")
