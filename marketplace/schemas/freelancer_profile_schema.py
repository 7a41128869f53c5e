# marketplace/schemas/freelancer_profile_schema.py
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Literal, Optional
from datetime import date, datetime
from marketplace.schemas.common import RequestBody, MessageOut, flatten_sections
from marketplace.schemas.user_schema import UserSummaryOut

VerificationBadge = Literal['ID verified', 'skill verified', 'unverified']
AvailabilityStatus = Literal['Available', 'Busy', 'Unavailable']
MediaType = Literal['image', 'video']

class SocialLinks(RequestBody):
    instagram: str = ""
    linkedin: str = ""

# 前端表單送來的分組 body -> 攤平後的欄位名
FREELANCER_SECTIONS = {
    "personalInfo": {},
    "skills": {},
    "pricing": {},
    "availability": {"status": "availability_status"},
    "contact": {},
    "additionalInfo": {},
    "settings": {
        "privacy.showContactInfo": "show_contact_info",
        "notifications.bookingRequests": "notify_booking_requests",
        "notifications.messages": "notify_messages",
    },
    "optionalExtras": {},
}

# --- 建立 / 更新 Profile (Upsert) ---
# 全部選填；只有「有被傳入」的欄位會被寫入 (exclude_unset)
# 單層欄位與分組 body 兩種寫法都接受
class FreelancerProfileUpsert(RequestBody):
    @model_validator(mode="before")
    @classmethod
    def flatten_grouped_body(cls, data):
        return flatten_sections(data, FREELANCER_SECTIONS)

    # 個人資料
    profile_photo: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    languages: Optional[List[str]] = None
    verification_badge: Optional[VerificationBadge] = None

    # 技能
    primary_skills: Optional[List[str]] = None
    secondary_skills: Optional[List[str]] = None
    categories: Optional[List[str]] = None
    years_of_experience: Optional[int] = Field(None, ge=0)

    # 價格
    hourly_rate: Optional[float] = Field(None, ge=0)
    per_job_rate: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, max_length=10)
    negotiable: Optional[bool] = None

    # 檔期
    calendar: Optional[List[date]] = None
    availability_status: Optional[AvailabilityStatus] = None
    max_jobs_per_day: Optional[int] = Field(None, ge=0)

    # 聯絡方式
    message_enabled: Optional[bool] = None
    hire_enabled: Optional[bool] = None
    social_links: Optional[SocialLinks] = None

    # 其他資訊
    equipment: Optional[List[str]] = None
    specializations: Optional[List[str]] = None
    certifications: Optional[List[str]] = None

    # 設定
    show_contact_info: Optional[bool] = None
    notify_booking_requests: Optional[bool] = None
    notify_messages: Optional[bool] = None

    # 額外選項
    intro_video: Optional[str] = Field(None, max_length=500)
    urgent_availability: Optional[bool] = None
    badges: Optional[List[str]] = None

# --- 作品集 ---
class PortfolioItemCreate(RequestBody):
    title: str = Field(..., min_length=1, max_length=255)
    media_type: MediaType
    url: str = Field(..., min_length=1, max_length=500)
    tags: List[str] = []

class PortfolioItemUpdate(RequestBody):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    media_type: Optional[MediaType] = None
    url: Optional[str] = Field(None, min_length=1, max_length=500)
    tags: Optional[List[str]] = None

class PortfolioItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: str
    title: str
    media_type: str
    url: str
    tags: List[str] = []

# --- 評價 ---
class FreelancerReviewCreate(RequestBody):
    client_name: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)
    date: Optional[datetime] = None

class FreelancerReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    review_id: str
    client_name: str
    rating: int
    comment: str
    date: datetime

# --- 完整 Profile (Output) ---
class FreelancerProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    profile_id: str
    user_id: str
    user: Optional[UserSummaryOut] = None

    profile_photo: str = ""
    location: str = ""
    bio: str = ""
    languages: List[str] = []
    verification_badge: str

    primary_skills: List[str] = []
    secondary_skills: List[str] = []
    categories: List[str] = []
    years_of_experience: int

    portfolio: List[PortfolioItemOut] = []

    hourly_rate: float
    per_job_rate: float
    currency: str
    negotiable: bool

    calendar: List[date] = []
    availability_status: str
    max_jobs_per_day: int

    reviews: List[FreelancerReviewOut] = []

    message_enabled: bool
    hire_enabled: bool
    social_links: SocialLinks = SocialLinks()

    equipment: List[str] = []
    specializations: List[str] = []
    certifications: List[str] = []

    show_contact_info: bool
    notify_booking_requests: bool
    notify_messages: bool

    intro_video: str = ""
    urgent_availability: bool
    badges: List[str] = []

    created_at: datetime
    updated_at: datetime

# --- 回應外層 ({message, 實體}) ---
class FreelancerProfileResponse(MessageOut):
    profile: FreelancerProfileOut

class PortfolioResponse(MessageOut):
    portfolio: List[PortfolioItemOut]

class FreelancerReviewsResponse(MessageOut):
    reviews: List[FreelancerReviewOut]

class FreelancerSearchResponse(MessageOut):
    count: int
    profiles: List[FreelancerProfileOut]
