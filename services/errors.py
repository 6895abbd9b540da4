# services/errors.py
"""
Exceptions raised by the service layer.

Services stay HTTP-agnostic: plain ValueError means bad input or state,
PermissionError means the caller may not touch the record. The subclasses
below let routers pick a more specific status code.
"""


class NotFoundError(LookupError):
     """Requested record does not exist (or is not visible to the caller)."""


class ConflictError(ValueError):
     """Request clashes with existing state (duplicate, record in use)."""


class InvalidCredentialsError(PermissionError):
     """Email/password or token could not be verified."""
