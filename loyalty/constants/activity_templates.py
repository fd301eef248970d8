from loyalty.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- AUTH ----------------
    ActivityCode.LOGIN:
        "{actor_role} ({actor_email}) logged in",

    ActivityCode.LOGOUT:
        "{actor_role} ({actor_email}) logged out",

    # ---------------- USERS ----------------
    ActivityCode.CREATE_USER:
        "{actor_role} ({actor_email}) created user {target_email} with role {target_role}",

    ActivityCode.DEACTIVATE_USER:
        "{actor_role} ({actor_email}) deactivated user {target_email}",

    # ---------------- CUSTOMERS ----------------
    ActivityCode.DELETE_CUSTOMER:
        "{actor_role} ({actor_email}) deleted customer {target_name} ({customer_id})",

    ActivityCode.BULK_DELETE_CUSTOMERS:
        "{actor_role} ({actor_email}) deleted {count} customers",

    # ---------------- ITEMS ----------------
    ActivityCode.CREATE_ITEM:
        "{actor_role} ({actor_email}) created item {target_name} worth {points_value} points",

    ActivityCode.UPDATE_ITEM:
        "{actor_role} ({actor_email}) updated item {target_name}: {changes}",

    ActivityCode.DELETE_ITEM:
        "{actor_role} ({actor_email}) deleted item {target_name}",

    # ---------------- SETTINGS ----------------
    ActivityCode.UPDATE_SETTINGS:
        "{actor_role} ({actor_email}) updated settings: {changes}",

    ActivityCode.UPDATE_BRANDING:
        "{actor_role} ({actor_email}) updated branding: {changes}",
}
