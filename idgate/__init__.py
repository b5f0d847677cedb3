"""idgate: identity verification and session establishment for a multi-tenant service."""

__version__ = "0.1.0"
