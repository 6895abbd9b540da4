# paths.py
"""Landing pages per role, shared by the auth and dashboard routes."""

ROLE_HOME_PATHS = {
     "admin": "/admin",
     "landlord": "/landlord",
     "tenant": "/tenant",
}

SIGN_IN_PATH = "/auth/sign-in"


def role_home_path(role) -> str:
     return ROLE_HOME_PATHS.get(role, SIGN_IN_PATH)
