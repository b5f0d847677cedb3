from .user import NewUser, User, UserQuery

__all__ = ["NewUser", "User", "UserQuery"]
