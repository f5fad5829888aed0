from enum import Enum


class Role(str, Enum):
    EMPLOYEE = "employee"
    EMPLOYER = "employer"
