from .user import Role
from .job import JobType
from .application import ApplicationStatus

__all__ = ["Role", "JobType", "ApplicationStatus"]
