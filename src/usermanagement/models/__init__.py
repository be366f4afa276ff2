from .user import User, UserStatus, USER_STATUS_CODES, USER_ID_MIN, USER_ID_MAX

__all__ = ["User", "UserStatus", "USER_STATUS_CODES", "USER_ID_MIN", "USER_ID_MAX"]
