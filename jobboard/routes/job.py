# ========================================
# jobboard/routes/job.py - job postings
# ========================================

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from jobboard.database import get_db
from jobboard.models import JobType
from jobboard.repositories import jobs
from jobboard.schemas.job import JobCreate, JobDetailResponse, JobListResponse, JobResponse, JobUpdate
from jobboard.utils.auth import require_employer

router = APIRouter(prefix="/jobs", tags=["Jobs"])

# ===========================
# PUBLIC ENDPOINTS
# ===========================

# 1. SEARCH JOBS WITH FILTERS AND PAGINATION
@router.get("", response_model=JobListResponse)
async def get_all_jobs(
    search: Optional[str] = Query(None, description="Search in title, company, location, description or type"),
    job_type: Optional[JobType] = Query(None, alias="type", description="Full-time, Part-time, Contract, Internship"),
    location: Optional[str] = Query(None, description="Case-insensitive location match"),
    page: int = Query(jobs.DEFAULT_PAGE, ge=1),
    limit: int = Query(jobs.DEFAULT_LIMIT, ge=1, le=100),
):
    """List jobs newest first, one page at a time."""
    db = get_db()
    return await jobs.list_jobs(
        db,
        search=search,
        job_type=job_type.value if job_type else None,
        location=location,
        page=page,
        limit=limit,
    )


# ===========================
# EMPLOYER ENDPOINTS
# ===========================

# 2. MY POSTED JOBS
@router.get("/employer/jobs", response_model=List[JobResponse])
async def get_employer_jobs(current_user: dict = Depends(require_employer)):
    db = get_db()
    return await jobs.list_for_employer(db, current_user["_id"])


# 3. POST A JOB
@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(job: JobCreate, current_user: dict = Depends(require_employer)):
    """Create a job owned by the caller."""
    db = get_db()
    return await jobs.create_job(db, job.model_dump(mode="json"), current_user["_id"])


# 4. GET SINGLE JOB (public)
@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job_details(job_id: str):
    db = get_db()
    return await jobs.get_job(db, job_id)


# 5. UPDATE JOB (owner only)
@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    job_update: JobUpdate,
    current_user: dict = Depends(require_employer)
):
    db = get_db()
    return await jobs.update_job(db, job_id, job_update.model_dump(mode="json", exclude_unset=True), current_user["_id"])


# 6. DELETE JOB (owner only)
@router.delete("/{job_id}")
async def delete_job(job_id: str, current_user: dict = Depends(require_employer)):
    db = get_db()
    await jobs.delete_job(db, job_id, current_user["_id"])
    return {"message": "Job removed", "job_id": job_id}
