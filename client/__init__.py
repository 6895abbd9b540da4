# client/__init__.py
from .api_client import ApiClient, ApiError, AuthenticationError

__all__ = ["ApiClient", "ApiError", "AuthenticationError"]
