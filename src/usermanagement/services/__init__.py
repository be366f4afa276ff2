# Re-export primary service layer entry points for convenience.
from .user import (
    create_user,
    get_user_or_404,
    update_user,
    delete_user,
    list_users,
)
from .validation import validate_create, validate_update
from .uniqueness import user_name_taken, email_taken
from .health import ping

__all__ = [
    # user
    "create_user",
    "get_user_or_404",
    "update_user",
    "delete_user",
    "list_users",
    # validation
    "validate_create",
    "validate_update",
    # uniqueness
    "user_name_taken",
    "email_taken",
    # health
    "ping",
]
