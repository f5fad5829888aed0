# ========================================
# jobboard/routes/application.py - job applications
# ========================================

from typing import List

from fastapi import APIRouter, Depends, status

from jobboard.database import get_db
from jobboard.repositories import applications
from jobboard.schemas.application import (
    ApplicationCreate,
    ApplicationDetailResponse,
    ApplicationResponse,
    ApplicationStatusUpdate,
    JobApplicationResponse,
    MyApplicationResponse,
)
from jobboard.utils.auth import require_employee, require_employer

router = APIRouter(prefix="/applications", tags=["Applications"])

# ===========================
# EMPLOYEE ENDPOINTS
# ===========================

# 1. APPLY FOR JOB
@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_job(application: ApplicationCreate, current_user: dict = Depends(require_employee)):
    """Submit an application. Only one per job per applicant."""
    db = get_db()
    return await applications.create_application(
        db,
        application.job_id,
        current_user["_id"],
        application.resume,
        application.cover_letter,
    )


# 2. GET MY APPLICATIONS
@router.get("", response_model=List[MyApplicationResponse])
async def get_my_applications(current_user: dict = Depends(require_employee)):
    db = get_db()
    return await applications.list_for_applicant(db, current_user["_id"])


# ===========================
# EMPLOYER ENDPOINTS
# ===========================

# 3. GET A JOB'S APPLICATIONS (job owner only)
@router.get("/job/{job_id}", response_model=List[JobApplicationResponse])
async def get_job_applications(job_id: str, current_user: dict = Depends(require_employer)):
    db = get_db()
    return await applications.list_for_job(db, job_id, current_user["_id"])


# 4. UPDATE APPLICATION STATUS (job owner only)
@router.put("/{application_id}", response_model=ApplicationDetailResponse)
async def update_status(
    application_id: str,
    status_update: ApplicationStatusUpdate,
    current_user: dict = Depends(require_employer)
):
    """Set any of pending, reviewing, accepted or rejected."""
    db = get_db()
    return await applications.update_status(db, application_id, status_update.status, current_user["_id"])
