# marketplace/schemas/client_profile_schema.py
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Literal, Optional
from datetime import datetime
from marketplace.schemas.common import RequestBody, MessageOut, flatten_sections
from marketplace.schemas.user_schema import UserSummaryOut

ClientVerification = Literal['Verified', 'Unverified']
JobStatus = Literal['In Progress', 'Completed', 'Cancelled']

CLIENT_SECTIONS = {
    "personalInfo": {},
    "contact": {},
    "settings": {
        "privacy.showContactInfo": "show_contact_info",
        "notifications.jobUpdates": "notify_job_updates",
        "notifications.messages": "notify_messages",
    },
}

# --- 建立 / 更新 Profile (Upsert) ---
# name 在「建立」時必填，由 Service 檢查
class ClientProfileUpsert(RequestBody):
    @model_validator(mode="before")
    @classmethod
    def flatten_grouped_body(cls, data):
        return flatten_sections(data, CLIENT_SECTIONS)

    profile_photo: Optional[str] = Field(None, max_length=500)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    verification_badge: Optional[ClientVerification] = None

    message_enabled: Optional[bool] = None
    post_job_enabled: Optional[bool] = None
    show_contact_info: Optional[bool] = None
    notify_job_updates: Optional[bool] = None
    notify_messages: Optional[bool] = None

# --- 案件管理 ---
class ActiveJobCreate(RequestBody):
    title: str = Field(..., min_length=1, max_length=255)
    freelancer: str = Field(..., min_length=1, max_length=100)
    date: datetime
    status: JobStatus = 'In Progress'

class JobStatusUpdate(RequestBody):
    status: JobStatus

class ActiveJobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    job_id: str
    title: str
    freelancer: str
    date: datetime
    status: str

class PastJobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    job_id: str
    title: str
    freelancer: str
    status: str
    date: datetime

# --- 收藏工作者 ---
class SavedFreelancerCreate(RequestBody):
    freelancer_name: str = Field(..., min_length=1, max_length=100)

# --- 評價工作者 ---
class ClientReviewCreate(RequestBody):
    freelancer_name: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)
    date: Optional[datetime] = None

class ClientReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    review_id: str
    freelancer_name: str
    rating: int
    comment: str
    date: datetime

# --- 付款 ---
class PaymentMethodCreate(RequestBody):
    method: str = Field(..., min_length=1, max_length=100)

class PaymentHistoryCreate(RequestBody):
    job: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., ge=0)
    date: Optional[datetime] = None

class PaymentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment_id: str
    job: str
    amount: float
    date: datetime

# --- 完整 Profile (Output) ---
class ClientProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    profile_id: str
    user_id: str
    user: Optional[UserSummaryOut] = None

    profile_photo: str = ""
    name: str
    location: str = ""
    bio: str = ""
    verification_badge: str

    active_jobs: List[ActiveJobOut] = []
    past_jobs: List[PastJobOut] = []
    saved_freelancers: List[str] = []
    reviews: List[ClientReviewOut] = []
    payment_methods: List[str] = []
    payment_history: List[PaymentOut] = []

    message_enabled: bool
    post_job_enabled: bool
    show_contact_info: bool
    notify_job_updates: bool
    notify_messages: bool

    created_at: datetime
    updated_at: datetime

# --- 回應外層 ---
class ClientProfileResponse(MessageOut):
    profile: ClientProfileOut

class ActiveJobsResponse(MessageOut):
    active_jobs: List[ActiveJobOut]

class JobStatusResponse(MessageOut):
    active_jobs: List[ActiveJobOut]
    past_jobs: List[PastJobOut]

class SavedFreelancersResponse(MessageOut):
    saved_freelancers: List[str]

class ClientReviewsResponse(MessageOut):
    reviews: List[ClientReviewOut]

class PaymentMethodsResponse(MessageOut):
    payment_methods: List[str]

class PaymentHistoryResponse(MessageOut):
    payment_history: List[PaymentOut]
