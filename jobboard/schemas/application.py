from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from jobboard.models import ApplicationStatus, JobType
from .common import NonEmptyStr, OptionalText


# 1. Input: Create Application (clients send camelCase keys)
class ApplicationCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: NonEmptyStr = Field(..., alias="jobId")
    resume: NonEmptyStr
    cover_letter: OptionalText = Field(None, alias="coverLetter")


# 2. Input: Update Status
class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


# 3. Output: Reduced views joined onto applications
class JobSummary(BaseModel):
    id: str
    title: str
    company: str
    type: JobType
    location: str


class ApplicantSummary(BaseModel):
    id: str
    name: str
    email: str
    location: Optional[str] = None


# 4. Output: Basic Response
class ApplicationResponse(BaseModel):
    id: str
    job: str
    applicant: str
    resume: str
    cover_letter: Optional[str] = None
    status: ApplicationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# 5. Output: Applicant's own list (job is null once the posting is deleted)
class MyApplicationResponse(ApplicationResponse):
    job_details: Optional[JobSummary] = None


# 6. Output: Employer's view of a job's applicants
class JobApplicationResponse(ApplicationResponse):
    applicant_details: Optional[ApplicantSummary] = None


# 7. Output: After a status change
class ApplicationDetailResponse(ApplicationResponse):
    job_details: Optional[JobSummary] = None
    applicant_details: Optional[ApplicantSummary] = None
