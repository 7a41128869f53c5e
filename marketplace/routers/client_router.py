# marketplace/routers/client_router.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.database import get_db
from marketplace.core.security import get_active_token_data, get_token_data
from marketplace.schemas.user_schema import TokenData
from marketplace.services.client_profile_service import ClientProfileService
from marketplace.schemas.client_profile_schema import (
    ClientProfileUpsert, ClientProfileResponse,
    ActiveJobCreate, ActiveJobsResponse, JobStatusUpdate, JobStatusResponse,
    SavedFreelancerCreate, SavedFreelancersResponse,
    ClientReviewCreate, ClientReviewsResponse,
    PaymentMethodCreate, PaymentMethodsResponse,
    PaymentHistoryCreate, PaymentHistoryResponse,
)

router = APIRouter(
    prefix="/client",
    tags=["Client Profiles"],
    dependencies=[Depends(get_active_token_data)]
)


@router.api_route("/profile", methods=["POST", "PUT"], response_model=ClientProfileResponse)
async def upsert_my_profile(
    profile_data: ClientProfileUpsert,
    response: Response,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    """
    建立或更新自己的客戶 Profile (建立時 name 必填)
    """
    service = ClientProfileService(db)
    profile, created = await service.upsert_profile(token_data.user_id, profile_data)

    if created:
        response.status_code = status.HTTP_201_CREATED
        return {"message": "Profile created successfully", "profile": profile}
    return {"message": "Profile updated successfully", "profile": profile}


@router.get("/profile/me", response_model=ClientProfileResponse)
async def get_my_profile(
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    profile = await service.get_my_profile(token_data.user_id)
    return {"message": "Profile fetched successfully", "profile": profile}


@router.get("/profile/user/{user_id}", response_model=ClientProfileResponse)
async def get_profile_by_user_id(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    profile = await service.get_profile_by_user_id(user_id)
    return {"message": "Profile fetched successfully", "profile": profile}


@router.get("/profile/{profile_id}", response_model=ClientProfileResponse)
async def get_profile(
    profile_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    profile = await service.get_profile(profile_id)
    return {"message": "Profile fetched successfully", "profile": profile}


# --- 案件管理 ---
@router.post("/jobs/active", response_model=ActiveJobsResponse)
async def add_active_job(
    job_data: ActiveJobCreate,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    active_jobs = await service.add_active_job(token_data.user_id, job_data)
    return {"message": "Active job added successfully", "active_jobs": active_jobs}


@router.put("/jobs/{job_id}/status", response_model=JobStatusResponse)
async def update_job_status(
    job_id: str,
    status_data: JobStatusUpdate,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    """
    更新案件狀態；設為 'Completed' 時案件會移到 past_jobs
    """
    service = ClientProfileService(db)
    profile = await service.update_job_status(token_data.user_id, job_id, status_data.status)
    return {
        "message": "Job status updated successfully",
        "active_jobs": profile.active_jobs,
        "past_jobs": profile.past_jobs,
    }


# --- 收藏工作者 ---
@router.post("/saved-freelancers", response_model=SavedFreelancersResponse)
async def add_saved_freelancer(
    data: SavedFreelancerCreate,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    saved = await service.add_saved_freelancer(token_data.user_id, data.freelancer_name)
    return {"message": "Freelancer saved successfully", "saved_freelancers": saved}


@router.delete("/saved-freelancers/{freelancer_name}", response_model=SavedFreelancersResponse)
async def remove_saved_freelancer(
    freelancer_name: str,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    saved = await service.remove_saved_freelancer(token_data.user_id, freelancer_name)
    return {"message": "Freelancer removed from saved list", "saved_freelancers": saved}


# --- 評價工作者 ---
@router.post("/reviews", response_model=ClientReviewsResponse)
async def add_freelancer_review(
    review_data: ClientReviewCreate,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    reviews = await service.add_freelancer_review(token_data.user_id, review_data)
    return {"message": "Review added successfully", "reviews": reviews}


# --- 付款 ---
@router.post("/payment/methods", response_model=PaymentMethodsResponse)
async def add_payment_method(
    data: PaymentMethodCreate,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    methods = await service.add_payment_method(token_data.user_id, data.method)
    return {"message": "Payment method added successfully", "payment_methods": methods}


@router.post("/payment/history", response_model=PaymentHistoryResponse)
async def add_payment_history(
    payment_data: PaymentHistoryCreate,
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db)
):
    service = ClientProfileService(db)
    history = await service.add_payment_history(token_data.user_id, payment_data)
    return {"message": "Payment history added successfully", "payment_history": history}
