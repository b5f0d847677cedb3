from .password_reset_request_service import PasswordResetRequestService
from .password_reset_service import PasswordResetService
from .reset_policy import is_user_resettable

__all__ = ["PasswordResetRequestService", "PasswordResetService", "is_user_resettable"]
