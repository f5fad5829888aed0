# ========================================
# jobboard/repositories/applications.py - job applications
# ========================================

import logging
from datetime import datetime
from typing import Optional

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from jobboard.errors import Conflict, Forbidden, NotFound
from jobboard.models import ApplicationStatus
from jobboard.utils.ids import parse_object_id
from jobboard.utils.ownership import ensure_owner

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]

ALREADY_APPLIED = "You have already applied to this job"


def public_application(application: dict) -> dict:
    return {
        "id": str(application["_id"]),
        "job": str(application["job"]),
        "applicant": str(application["applicant"]),
        "resume": application.get("resume"),
        "cover_letter": application.get("cover_letter"),
        "status": application.get("status"),
        "created_at": application.get("created_at"),
        "updated_at": application.get("updated_at"),
    }


def job_summary(job: Optional[dict]) -> Optional[dict]:
    if not job:
        return None
    return {
        "id": str(job["_id"]),
        "title": job.get("title"),
        "company": job.get("company"),
        "type": job.get("type"),
        "location": job.get("location"),
    }


def applicant_summary(user: Optional[dict]) -> Optional[dict]:
    if not user:
        return None
    return {
        "id": str(user["_id"]),
        "name": user.get("name"),
        "email": user.get("email"),
        "location": user.get("location"),
    }


async def _find_by_ids(collection, ids) -> dict:
    ids = list(set(ids))
    if not ids:
        return {}
    documents = await collection.find({"_id": {"$in": ids}}).to_list(length=None)
    return {document["_id"]: document for document in documents}


# 1. APPLY (employee)
async def create_application(db, job_id, applicant_id, resume: str, cover_letter: Optional[str] = None) -> dict:
    job_object_id = parse_object_id(job_id)
    job = await db.jobs.find_one({"_id": job_object_id}) if job_object_id else None
    if not job:
        raise NotFound("Job not found")

    applicant_object_id = parse_object_id(applicant_id)
    existing = await db.applications.find_one({"job": job["_id"], "applicant": applicant_object_id})
    if existing:
        raise Conflict(ALREADY_APPLIED)

    now = datetime.utcnow()
    application = {
        "job": job["_id"],
        "applicant": applicant_object_id,
        "resume": resume,
        "cover_letter": cover_letter,
        "status": ApplicationStatus.PENDING.value,
        "created_at": now,
        "updated_at": now,
    }

    try:
        result = await db.applications.insert_one(application)
    except DuplicateKeyError:
        # A concurrent request for the same (job, applicant) won the insert
        raise Conflict(ALREADY_APPLIED)

    application["_id"] = result.inserted_id
    logger.info("Applicant %s applied to job %s", applicant_id, job["_id"])
    return public_application(application)


# 2. MY APPLICATIONS (employee)
async def list_for_applicant(db, applicant_id) -> list:
    applications = await db.applications.find(
        {"applicant": parse_object_id(applicant_id)}, sort=NEWEST_FIRST
    ).to_list(length=None)

    jobs = await _find_by_ids(db.jobs, [app["job"] for app in applications])

    result = []
    for app in applications:
        item = public_application(app)
        item["job_details"] = job_summary(jobs.get(app["job"]))
        result.append(item)
    return result


# 3. A JOB'S APPLICATIONS (owning employer)
async def list_for_job(db, job_id, requester_id) -> list:
    job_object_id = parse_object_id(job_id)
    job = await db.jobs.find_one({"_id": job_object_id}) if job_object_id else None
    if not job:
        raise NotFound("Job not found")

    ensure_owner(job["employer"], requester_id, "Not authorized to view these applications")

    applications = await db.applications.find({"job": job["_id"]}, sort=NEWEST_FIRST).to_list(length=None)
    applicants = await _find_by_ids(db.users, [app["applicant"] for app in applications])

    result = []
    for app in applications:
        item = public_application(app)
        item["applicant_details"] = applicant_summary(applicants.get(app["applicant"]))
        result.append(item)
    return result


# 4. UPDATE STATUS (owning employer). Any status may follow any other.
async def update_status(db, application_id, new_status, requester_id) -> dict:
    status = ApplicationStatus(new_status)

    object_id = parse_object_id(application_id)
    application = await db.applications.find_one({"_id": object_id}) if object_id else None
    if not application:
        raise NotFound("Application not found")

    job = await db.jobs.find_one({"_id": application["job"]})
    if not job:
        # The posting was deleted, so nobody owns it any more
        raise Forbidden("Not authorized to update this application")
    ensure_owner(job["employer"], requester_id, "Not authorized to update this application")

    await db.applications.update_one(
        {"_id": application["_id"]},
        {"$set": {"status": status.value, "updated_at": datetime.utcnow()}},
    )
    logger.info("Application %s set to %s by %s", application["_id"], status.value, requester_id)

    updated = await db.applications.find_one({"_id": application["_id"]})
    applicant = await db.users.find_one({"_id": updated["applicant"]})

    result = public_application(updated)
    result["job_details"] = job_summary(job)
    result["applicant_details"] = applicant_summary(applicant)
    return result
