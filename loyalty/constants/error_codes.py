from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- USERS ----------------
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_EMAIL_EXISTS = "USER_EMAIL_EXISTS"
    USER_ALREADY_INACTIVE = "USER_ALREADY_INACTIVE"

    # ---------------- CUSTOMERS ----------------
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    CUSTOMER_ID_EXISTS = "CUSTOMER_ID_EXISTS"

    # ---------------- ITEMS ----------------
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"

    # ---------------- POINTS ----------------
    POINTS_OPERATION_FAILED = "POINTS_OPERATION_FAILED"
