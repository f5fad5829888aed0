# ========================================
# jobboard/repositories/jobs.py - job postings
# ========================================

import logging
import math
import re
from datetime import datetime
from typing import Optional

from pymongo import DESCENDING

from jobboard.errors import NotFound
from jobboard.utils.ids import parse_object_id
from jobboard.utils.ownership import ensure_owner

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

SEARCH_FIELDS = ("title", "company", "location", "description", "type")
REQUIRED_FIELDS = ("title", "company", "type", "location", "description")
OPTIONAL_FIELDS = ("requirements", "salary")

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


def public_job(job: dict) -> dict:
    data = {field: job.get(field) for field in REQUIRED_FIELDS + OPTIONAL_FIELDS}
    data["id"] = str(job["_id"])
    data["employer"] = str(job["employer"])
    data["created_at"] = job.get("created_at")
    data["updated_at"] = job.get("updated_at")
    return data


def employer_summary(user: Optional[dict]) -> Optional[dict]:
    if not user:
        return None
    return {
        "id": str(user["_id"]),
        "name": user.get("name"),
        "company": user.get("company"),
        "location": user.get("location"),
    }


def build_search_query(search=None, job_type=None, location=None) -> dict:
    """Translate the public search filters into a Mongo query."""
    query = {}

    # Free text: literal, case-insensitive substring over every searchable field
    if search:
        pattern = re.escape(search.strip())
        query["$or"] = [
            {field: {"$regex": pattern, "$options": "i"}}
            for field in SEARCH_FIELDS
        ]

    if job_type:
        query["type"] = job_type

    if location:
        query["location"] = {"$regex": re.escape(location.strip()), "$options": "i"}

    return query


async def _load_job(db, job_id) -> dict:
    object_id = parse_object_id(job_id)
    job = await db.jobs.find_one({"_id": object_id}) if object_id else None
    if not job:
        raise NotFound("Job not found")
    return job


async def _employers_by_id(db, jobs) -> dict:
    employer_ids = list({job["employer"] for job in jobs})
    if not employer_ids:
        return {}
    users = await db.users.find({"_id": {"$in": employer_ids}}).to_list(length=None)
    return {user["_id"]: user for user in users}


# 1. SEARCH (public)
async def list_jobs(db, search=None, job_type=None, location=None,
                    page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> dict:
    query = build_search_query(search, job_type, location)
    skip = (page - 1) * limit

    jobs = await db.jobs.find(query, sort=NEWEST_FIRST, skip=skip, limit=limit).to_list(length=limit)
    total = await db.jobs.count_documents(query)

    employers = await _employers_by_id(db, jobs)
    results = []
    for job in jobs:
        item = public_job(job)
        item["employer_profile"] = employer_summary(employers.get(job["employer"]))
        results.append(item)

    return {
        "jobs": results,
        "total": total,
        "total_pages": math.ceil(total / limit),
        "current_page": page,
    }


# 2. GET ONE (public)
async def get_job(db, job_id) -> dict:
    job = await _load_job(db, job_id)
    employer = await db.users.find_one({"_id": job["employer"]})

    result = public_job(job)
    result["employer_profile"] = employer_summary(employer)
    return result


# 3. CREATE (employer)
async def create_job(db, fields: dict, employer_id) -> dict:
    new_job = {field: fields[field] for field in REQUIRED_FIELDS}
    for field in OPTIONAL_FIELDS:
        new_job[field] = fields.get(field)

    # The owner is always the caller, whatever the payload claims
    new_job["employer"] = parse_object_id(employer_id)
    new_job["created_at"] = datetime.utcnow()

    result = await db.jobs.insert_one(new_job)
    new_job["_id"] = result.inserted_id

    logger.info("Employer %s created job %s", employer_id, new_job["_id"])
    return public_job(new_job)


# 4. UPDATE (owning employer)
async def update_job(db, job_id, fields: dict, requester_id) -> dict:
    job = await _load_job(db, job_id)
    ensure_owner(job["employer"], requester_id, "Not authorized to update this job")

    update_data = {field: fields[field] for field in REQUIRED_FIELDS}
    for field in OPTIONAL_FIELDS:
        if field in fields:
            update_data[field] = fields[field]
    update_data["updated_at"] = datetime.utcnow()

    await db.jobs.update_one({"_id": job["_id"]}, {"$set": update_data})

    logger.info("Employer %s updated job %s", requester_id, job["_id"])
    updated_job = await db.jobs.find_one({"_id": job["_id"]})
    return public_job(updated_job)


# 5. DELETE (owning employer). Applications are left in place.
async def delete_job(db, job_id, requester_id) -> None:
    job = await _load_job(db, job_id)
    ensure_owner(job["employer"], requester_id, "Not authorized to delete this job")

    await db.jobs.delete_one({"_id": job["_id"]})
    logger.info("Employer %s deleted job %s", requester_id, job["_id"])


# 6. EMPLOYER'S OWN JOBS
async def list_for_employer(db, employer_id) -> list:
    object_id = parse_object_id(employer_id)
    jobs = await db.jobs.find({"employer": object_id}, sort=NEWEST_FIRST).to_list(length=None)
    return [public_job(job) for job in jobs]
