from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from jobboard.models import JobType
from .common import NonEmptyStr, OptionalText


# 1. Input: What the Employer sends
class JobCreate(BaseModel):
    title: NonEmptyStr = Field(..., max_length=100)
    company: NonEmptyStr
    type: JobType
    location: NonEmptyStr
    description: NonEmptyStr
    requirements: OptionalText = None
    salary: OptionalText = None


# 2. Input: Update existing job (full replacement, re-validated)
class JobUpdate(JobCreate):
    pass


# 3. Output: Public view of the posting employer
class EmployerSummary(BaseModel):
    id: str
    name: str
    company: Optional[str] = None
    location: Optional[str] = None


# 4. Output: Basic Response
class JobResponse(BaseModel):
    id: str
    title: str
    company: str
    type: JobType
    location: str
    description: str
    requirements: Optional[str] = None
    salary: Optional[str] = None
    employer: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# 5. Output: Job with its employer's public profile attached
class JobDetailResponse(JobResponse):
    employer_profile: Optional[EmployerSummary] = None


# 6. Output: One page of search results
class JobListResponse(BaseModel):
    jobs: List[JobDetailResponse]
    total: int
    total_pages: int
    current_page: int
