# marketplace/models/client_profile.py
from datetime import datetime
from sqlalchemy import (
    Column, String, TEXT, ForeignKey, JSON, DECIMAL, CHAR, Enum, INT, Boolean, TIMESTAMP
)
from sqlalchemy.orm import relationship
from marketplace.core.database import Base

ClientVerificationEnum = Enum('Verified', 'Unverified', name="client_verification_enum")
ActiveJobStatusEnum = Enum('In Progress', 'Completed', 'Cancelled', name="active_job_status_enum")
PastJobStatusEnum = Enum('Completed', 'Cancelled', name="past_job_status_enum")

class ClientProfile(Base):
    __tablename__ = "client_profiles"

    profile_id = Column(CHAR(36), primary_key=True)
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    # --- 個人資料 ---
    profile_photo = Column(String(500), default="")
    name = Column(String(100), nullable=False)
    location = Column(String(255), default="")
    bio = Column(TEXT, default="")
    verification_badge = Column(ClientVerificationEnum, default='Unverified')

    # 收藏的工作者 (名稱集合) 與付款方式 (集合)
    saved_freelancers = Column(JSON, default=list)
    payment_methods = Column(JSON, default=list)

    # --- 聯絡方式 / 設定 ---
    message_enabled = Column(Boolean, default=True)
    post_job_enabled = Column(Boolean, default=True)
    show_contact_info = Column(Boolean, default=True)
    notify_job_updates = Column(Boolean, default=True)
    notify_messages = Column(Boolean, default=True)

    created_at = Column(TIMESTAMP, default=datetime.now)
    updated_at = Column(TIMESTAMP, default=datetime.now, onupdate=datetime.now)

    user = relationship("User", back_populates="client_profile", lazy="selectin")

    active_jobs = relationship(
        "ClientActiveJob",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ClientActiveJob.created_at",
        lazy="selectin"
    )
    past_jobs = relationship(
        "ClientPastJob",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ClientPastJob.date",
        lazy="selectin"
    )
    reviews = relationship(
        "ClientReview",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ClientReview.date",
        lazy="selectin"
    )
    payment_history = relationship(
        "ClientPayment",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ClientPayment.date",
        lazy="selectin"
    )


class ClientActiveJob(Base):
    __tablename__ = "client_active_jobs"

    job_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("client_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    freelancer = Column(String(100), nullable=False)
    date = Column(TIMESTAMP, nullable=False)
    status = Column(ActiveJobStatusEnum, default='In Progress', nullable=False)
    created_at = Column(TIMESTAMP, default=datetime.now)

    profile = relationship("ClientProfile", back_populates="active_jobs")


class ClientPastJob(Base):
    __tablename__ = "client_past_jobs"

    job_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("client_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    freelancer = Column(String(100), nullable=False)
    status = Column(PastJobStatusEnum, default='Completed', nullable=False)
    date = Column(TIMESTAMP, default=datetime.now)

    profile = relationship("ClientProfile", back_populates="past_jobs")


class ClientReview(Base):
    __tablename__ = "client_reviews"

    review_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("client_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_name = Column(String(100), nullable=False)
    rating = Column(INT, nullable=False)
    comment = Column(TEXT, nullable=False)
    date = Column(TIMESTAMP, default=datetime.now)

    profile = relationship("ClientProfile", back_populates="reviews")


class ClientPayment(Base):
    __tablename__ = "client_payments"

    payment_id = Column(CHAR(36), primary_key=True)
    profile_id = Column(CHAR(36), ForeignKey("client_profiles.profile_id", ondelete="CASCADE"), nullable=False, index=True)
    job = Column(String(255), nullable=False)
    amount = Column(DECIMAL(10, 2), nullable=False)
    date = Column(TIMESTAMP, default=datetime.now)

    profile = relationship("ClientProfile", back_populates="payment_history")
