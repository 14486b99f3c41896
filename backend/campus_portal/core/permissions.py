from campus_portal.models.user import User

PERMISSION_DEFINITIONS = [
    {"code": "announcements.manage", "label": "Post and delete announcements"},
    {"code": "assignments.manage", "label": "Create and delete assignments"},
    {"code": "submissions.review", "label": "Review and grade submissions"},
    {"code": "materials.manage", "label": "Upload study materials"},
    {"code": "results.manage", "label": "Publish results"},
    {"code": "users.manage", "label": "Manage user accounts"},
    {"code": "assignments.submit", "label": "Submit assignments"},
    {"code": "chat.send", "label": "Send chat messages"},
    {"code": "feedback.send", "label": "Send feedback"},
]
ALLOWED_PERMISSIONS = {item["code"] for item in PERMISSION_DEFINITIONS}

VALID_ROLES = {"admin", "student"}
ROLE_PERMISSIONS = {
    "admin": ALLOWED_PERMISSIONS,
    "student": {"assignments.submit", "chat.send", "feedback.send"},
}


def normalize_role(value: object) -> str:
    role = str(value or "").strip().lower()
    return role if role in VALID_ROLES else "student"


def is_admin(user: User | None) -> bool:
    if not user:
        return False
    return normalize_role(getattr(user, "role", "")) == "admin"


def permissions_for_user(user: User | None) -> list[str]:
    if not user:
        return []
    return sorted(ROLE_PERMISSIONS.get(normalize_role(getattr(user, "role", "")), set()))


def has_permission(user: User | None, permission: str) -> bool:
    required_permission = str(permission or "").strip()
    if not required_permission:
        return False
    return required_permission in permissions_for_user(user)
