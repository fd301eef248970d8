# loyalty/constants/roles.py

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


ALL_ROLES = [UserRole.ADMIN.value, UserRole.STAFF.value]
ADMIN_ONLY = [UserRole.ADMIN.value]
