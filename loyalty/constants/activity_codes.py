from enum import Enum


class ActivityCode(str, Enum):
    # ---------------- AUTH ----------------
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"

    # ---------------- USERS ----------------
    CREATE_USER = "CREATE_USER"
    DEACTIVATE_USER = "DEACTIVATE_USER"

    # ---------------- CUSTOMERS ----------------
    DELETE_CUSTOMER = "DELETE_CUSTOMER"
    BULK_DELETE_CUSTOMERS = "BULK_DELETE_CUSTOMERS"

    # ---------------- ITEMS ----------------
    CREATE_ITEM = "CREATE_ITEM"
    UPDATE_ITEM = "UPDATE_ITEM"
    DELETE_ITEM = "DELETE_ITEM"

    # ---------------- SETTINGS ----------------
    UPDATE_SETTINGS = "UPDATE_SETTINGS"
    UPDATE_BRANDING = "UPDATE_BRANDING"
