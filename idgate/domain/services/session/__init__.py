from .session_service import SessionIssuanceService

__all__ = ["SessionIssuanceService"]
