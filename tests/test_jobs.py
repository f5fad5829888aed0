"""
Tests for job postings: CRUD, ownership, search and pagination.
"""

import asyncio
import math

import pytest
from bson import ObjectId

from conftest import JOB_PAYLOAD, auth_header


class TestCreateJob:

    def test_employer_is_the_caller(self, client, employer, register):
        other = register("employer")
        payload = dict(JOB_PAYLOAD, employer=other["id"])

        response = client.post("/jobs", json=payload, headers=auth_header(employer["token"]))

        assert response.status_code == 201
        assert response.json()["employer"] == employer["id"]

    def test_optional_fields_stored(self, client, employer):
        payload = dict(JOB_PAYLOAD, requirements="Python", salary="100k")

        response = client.post("/jobs", json=payload, headers=auth_header(employer["token"]))

        assert response.json()["requirements"] == "Python"
        assert response.json()["salary"] == "100k"

    @pytest.mark.parametrize("field", ["title", "company", "type", "location", "description"])
    def test_required_fields(self, client, employer, field):
        payload = {k: v for k, v in JOB_PAYLOAD.items() if k != field}

        response = client.post("/jobs", json=payload, headers=auth_header(employer["token"]))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field

    def test_blank_title_rejected(self, client, employer):
        response = client.post("/jobs", json=dict(JOB_PAYLOAD, title="   "), headers=auth_header(employer["token"]))

        assert response.status_code == 400

    def test_title_too_long(self, client, employer):
        response = client.post("/jobs", json=dict(JOB_PAYLOAD, title="x" * 101), headers=auth_header(employer["token"]))

        assert response.status_code == 400

    def test_unknown_type(self, client, employer):
        response = client.post("/jobs", json=dict(JOB_PAYLOAD, type="Freelance"), headers=auth_header(employer["token"]))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "type"


class TestGetJob:

    def test_job_with_employer_profile(self, client, employer, job):
        response = client.get(f"/jobs/{job['id']}")

        assert response.status_code == 200
        profile = response.json()["employer_profile"]
        assert profile["id"] == employer["id"]
        assert profile["name"] == "Acme HR"
        assert profile["company"] == "Acme"

    def test_missing_job(self, client):
        response = client.get(f"/jobs/{ObjectId()}")

        assert response.status_code == 404
        assert response.json() == {"message": "Job not found"}

    def test_malformed_id_is_not_found(self, client):
        response = client.get("/jobs/not-an-id")

        assert response.status_code == 404


class TestUpdateJob:

    def test_owner_can_update(self, client, employer, job):
        payload = dict(JOB_PAYLOAD, title="Senior Engineer", salary="120k")

        response = client.put(f"/jobs/{job['id']}", json=payload, headers=auth_header(employer["token"]))

        assert response.status_code == 200
        assert response.json()["title"] == "Senior Engineer"
        assert response.json()["salary"] == "120k"
        assert response.json()["employer"] == employer["id"]

    def test_omitted_optional_fields_are_kept(self, client, employer, create_job):
        job = create_job(employer, salary="90k")

        response = client.put(f"/jobs/{job['id']}", json=JOB_PAYLOAD, headers=auth_header(employer["token"]))

        assert response.json()["salary"] == "90k"

    def test_update_revalidates(self, client, employer, job):
        response = client.put(
            f"/jobs/{job['id']}",
            json=dict(JOB_PAYLOAD, type="Gig"),
            headers=auth_header(employer["token"]),
        )

        assert response.status_code == 400

    def test_employer_reference_is_immutable(self, client, employer, register, job):
        other = register("employer")

        response = client.put(
            f"/jobs/{job['id']}",
            json=dict(JOB_PAYLOAD, employer=other["id"]),
            headers=auth_header(employer["token"]),
        )

        assert response.json()["employer"] == employer["id"]

    def test_non_owner_forbidden(self, client, register, job):
        other = register("employer")

        response = client.put(f"/jobs/{job['id']}", json=JOB_PAYLOAD, headers=auth_header(other["token"]))

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized to update this job"}

    def test_missing_job(self, client, employer):
        response = client.put(f"/jobs/{ObjectId()}", json=JOB_PAYLOAD, headers=auth_header(employer["token"]))

        assert response.status_code == 404


class TestDeleteJob:

    def test_owner_can_delete(self, client, employer, job):
        response = client.delete(f"/jobs/{job['id']}", headers=auth_header(employer["token"]))

        assert response.status_code == 200
        assert response.json()["message"] == "Job removed"
        assert client.get(f"/jobs/{job['id']}").status_code == 404

    def test_non_owner_forbidden(self, client, register, job):
        other = register("employer")

        response = client.delete(f"/jobs/{job['id']}", headers=auth_header(other["token"]))

        assert response.status_code == 403
        assert client.get(f"/jobs/{job['id']}").status_code == 200

    def test_malformed_id(self, client, employer):
        response = client.delete("/jobs/123", headers=auth_header(employer["token"]))

        assert response.status_code == 404


class TestEmployerJobs:

    def test_only_own_jobs_newest_first(self, client, employer, register, create_job):
        other = register("employer")
        first = create_job(employer, title="First")
        second = create_job(employer, title="Second")
        create_job(other, title="Not mine")

        response = client.get("/jobs/employer/jobs", headers=auth_header(employer["token"]))

        assert response.status_code == 200
        assert [j["id"] for j in response.json()] == [second["id"], first["id"]]


class TestListJobs:

    def test_defaults(self, client, employer, create_job):
        for i in range(12):
            create_job(employer, title=f"Job {i}")

        body = client.get("/jobs").json()

        assert len(body["jobs"]) == 10
        assert body["total"] == 12
        assert body["total_pages"] == 2
        assert body["current_page"] == 1
        assert body["jobs"][0]["title"] == "Job 11"

    def test_pages(self, client, employer, create_job):
        for i in range(12):
            create_job(employer, title=f"Job {i}")

        seen = []
        for page in (1, 2, 3):
            body = client.get("/jobs", params={"page": page, "limit": 5}).json()
            assert len(body["jobs"]) <= 5
            assert body["total_pages"] == math.ceil(12 / 5)
            seen.extend(j["title"] for j in body["jobs"])

        assert len(seen) == 12
        assert len(set(seen)) == 12

    def test_page_beyond_range_is_empty(self, client, employer, create_job):
        create_job(employer)

        response = client.get("/jobs", params={"page": 4, "limit": 5})

        assert response.status_code == 200
        assert response.json()["jobs"] == []
        assert response.json()["total"] == 1

    def test_empty_board(self, client, db):
        body = client.get("/jobs").json()

        assert body == {"jobs": [], "total": 0, "total_pages": 0, "current_page": 1}

    def test_invalid_paging_rejected(self, client, db):
        assert client.get("/jobs", params={"page": 0}).status_code == 400
        assert client.get("/jobs", params={"limit": 0}).status_code == 400

    def test_listed_jobs_carry_employer(self, client, employer, job):
        listed = client.get("/jobs").json()["jobs"][0]

        assert listed["employer_profile"]["name"] == "Acme HR"

    def test_search_is_case_insensitive_across_fields(self, client, employer, create_job):
        create_job(employer, title="Data Analyst")
        create_job(employer, title="Engineer", company="Globex")
        create_job(employer, title="Engineer", description="Work on ANALYTICS pipelines")

        body = client.get("/jobs", params={"search": "analy"}).json()

        assert body["total"] == 2

    def test_search_matches_type(self, client, employer, create_job):
        create_job(employer, type="Internship")
        create_job(employer, type="Full-time")

        body = client.get("/jobs", params={"search": "intern"}).json()

        assert body["total"] == 1

    def test_search_is_literal(self, client, employer, create_job):
        create_job(employer, title="C++ Developer")
        create_job(employer, title="C Developer")

        body = client.get("/jobs", params={"search": "C++"}).json()

        assert [j["title"] for j in body["jobs"]] == ["C++ Developer"]

    def test_type_filter(self, client, employer, create_job):
        create_job(employer, type="Contract")
        create_job(employer, type="Part-time")

        body = client.get("/jobs", params={"type": "Contract"}).json()

        assert body["total"] == 1
        assert body["jobs"][0]["type"] == "Contract"

    def test_location_substring(self, client, employer, create_job):
        create_job(employer, location="Berlin, Germany")
        create_job(employer, location="Remote")

        body = client.get("/jobs", params={"location": "berlin"}).json()

        assert body["total"] == 1

    def test_stored_employer_is_object_id(self, client, db, employer, job):
        stored = asyncio.run(db.jobs.find_one({"_id": ObjectId(job["id"])}))

        assert stored["employer"] == ObjectId(employer["id"])
