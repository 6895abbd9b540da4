# services/dashboard_service.py
"""
Dashboard aggregation.

Pure functions over lists of row dicts, so the same numbers come out whether
the rows were loaded from the database (routers/dashboard.py) or fetched over
HTTP (client.ApiClient). Rows may use camelCase or snake_case keys.
"""
from datetime import date
from typing import Any, Dict, List, Optional

OPEN_MAINTENANCE = ("pending", "in_progress")

ADMIN_CARDS = (
     ("Users", "users"),
     ("Properties", "properties"),
     ("Leases", "leases"),
     ("Maintenance", "maintenance"),
     ("Notifications", "notifications"),
     ("Payments", "payments"),
)


def _get(row: Dict[str, Any], camel: str, snake: Optional[str] = None, default=None):
     if camel in row and row[camel] is not None:
          return row[camel]
     if snake and snake in row and row[snake] is not None:
          return row[snake]
     return default


def _number(value) -> float:
     try:
          return float(value)
     except (TypeError, ValueError):
          return 0.0


def extract_array(response) -> list:
     """A list as-is, ``{"data": [...]}`` unwrapped, anything else empty."""
     if isinstance(response, list):
          return response
     if isinstance(response, dict) and isinstance(response.get("data"), list):
          return response["data"]
     return []


def _with_status(rows: List[dict], *statuses: str) -> List[dict]:
     return [row for row in rows if row.get("status") in statuses]


def payment_amount(payment: dict) -> float:
     """Amount due on a payment row: ``amount``, else ``totalAmount``."""
     return _number(_get(payment, "amount", default=_get(payment, "totalAmount", "total_amount", 0)))


def payment_type_label(payment: Optional[dict]) -> str:
     """'Deposit + Rent' style label from the non-zero components."""
     if not payment:
          return "—"
     parts = []
     if _number(_get(payment, "depositAmount", "deposit_amount", 0)) > 0:
          parts.append("Deposit")
     if _number(_get(payment, "rentAmount", "rent_amount", 0)) > 0:
          parts.append("Rent")
     if _number(_get(payment, "utilitiesAmount", "utilities_amount", 0)) > 0:
          parts.append("Utilities")
     return " + ".join(parts) if parts else "Other"


def tenant_summary(properties, leases, maintenance, payments) -> Dict[str, Any]:
     """
     Numbers for the tenant home page.

     Each argument may be a list or a ``{"data": [...]}`` envelope.
     """
     properties = extract_array(properties)
     leases = extract_array(leases)
     maintenance = extract_array(maintenance)
     payments = extract_array(payments)

     open_requests = _with_status(maintenance, *OPEN_MAINTENANCE)
     active_leases = _with_status(leases, "active")
     pending_payments = _with_status(payments, "pending")

     return {
          "availableProperties": len(_with_status(properties, "available")),
          "myApplications": len(_with_status(leases, "pending")),
          "openMaintenanceRequests": len(open_requests),
          "paymentsDueAmount": sum(payment_amount(p) for p in pending_payments),
          "pendingPaymentsCount": len(pending_payments),
          "hasActiveLease": bool(active_leases),
          "currentLease": active_leases[0] if active_leases else None,
          "latestOpenMaintenance": open_requests[0] if open_requests else None,
          "nextPayment": pending_payments[0] if pending_payments else None,
     }


def current_period(today: Optional[date] = None) -> str:
     return (today or date.today()).strftime("%Y-%m")


def payment_stats(payments, current_month: Optional[str] = None) -> Dict[str, Any]:
     """Revenue figures for the landlord payments page."""
     current_month = current_month or current_period()
     stats = {
          "totalRevenue": 0.0,
          "pendingAmount": 0.0,
          "paidCount": 0,
          "pendingCount": 0,
          "thisMonthRevenue": 0.0,
     }
     for payment in extract_array(payments):
          total = _number(_get(payment, "totalAmount", "total_amount", 0))
          status = payment.get("status")
          if status == "paid":
               stats["totalRevenue"] += total
               stats["paidCount"] += 1
               if payment.get("period") == current_month:
                    stats["thisMonthRevenue"] += total
          elif status == "pending":
               stats["pendingAmount"] += total
               stats["pendingCount"] += 1
     return stats


def filter_payments(payments, status: str = "all", period: str = "all") -> List[dict]:
     rows = extract_array(payments)
     if status != "all":
          rows = [p for p in rows if p.get("status") == status]
     if period != "all":
          rows = [p for p in rows if p.get("period") == period]
     return rows


def unique_tenants(leases) -> List[Dict[str, Any]]:
     """One entry per tenant holding an active lease; last lease wins."""
     tenants: Dict[Any, Dict[str, Any]] = {}
     for lease in _with_status(extract_array(leases), "active"):
          tenant_id = _get(lease, "tenantId", "tenant_id")
          if not tenant_id:
               continue
          tenants[tenant_id] = {
               "id": tenant_id,
               "name": _get(lease, "tenantName", "tenant_name") or "Unknown Tenant",
               "email": _get(lease, "tenantEmail", "tenant_email") or "",
          }
     return list(tenants.values())


def landlord_summary(properties, leases, applications, maintenance, payments, current_month: Optional[str] = None) -> Dict[str, Any]:
     properties = extract_array(properties)
     leases = extract_array(leases)
     applications = extract_array(applications)
     maintenance = extract_array(maintenance)

     summary = {
          "totalProperties": len(properties),
          "availableProperties": len(_with_status(properties, "available")),
          "rentedProperties": len(_with_status(properties, "rented")),
          "activeLeases": len(_with_status(leases, "active")),
          "pendingApplications": len(_with_status(applications, "pending")),
          "openMaintenanceRequests": len(_with_status(maintenance, *OPEN_MAINTENANCE)),
          "urgentMaintenanceRequests": len(
               [m for m in _with_status(maintenance, *OPEN_MAINTENANCE) if m.get("priority") == "urgent"]
          ),
          "tenants": unique_tenants(leases),
     }
     summary.update(payment_stats(payments, current_month))
     return summary


def admin_counts(overview) -> List[Dict[str, Any]]:
     """Count cards for the admin home page."""
     data = overview.get("data", overview) if isinstance(overview, dict) else {}
     data = data or {}
     return [
          {"label": label, "value": len(data.get(key) or []), "href": f"/admin/{key}"}
          for label, key in ADMIN_CARDS
     ]
