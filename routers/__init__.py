# routers/__init__.py
from . import admin, applications, auth, dashboard, leases, maintenance, notifications, payments, properties

ALL_ROUTERS = [
     auth.router,
     properties.router,
     applications.router,
     leases.router,
     maintenance.router,
     notifications.router,
     payments.router,
     dashboard.router,
     admin.router,
]

__all__ = ["ALL_ROUTERS"]
