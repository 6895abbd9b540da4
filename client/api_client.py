# client/api_client.py
"""
HTTP client for the SmartRent API.

Usage:
     client = ApiClient(token_provider=lambda: session_store.get("token"))
     properties = client.properties.get_all(city="Austin")
     summary = client.dashboard.tenant_summary()

Every request carries ``Authorization: Bearer <token>`` when a token is
available. A 401 clears the stored token and calls ``on_unauthorized``
before raising AuthenticationError; requests are never retried.
"""
import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from services.dashboard_service import extract_array, tenant_summary
from utils.normalize import normalize_notification, normalize_property

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"


class ApiError(Exception):
     """Non-2xx response from the API."""

     def __init__(self, status_code: int, message: str, payload: Any = None):
          super().__init__(message)
          self.status_code = status_code
          self.message = message
          self.payload = payload


class AuthenticationError(ApiError):
     """401 from the API; the client's token has been cleared."""


def _clean(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
     return {key: value for key, value in (params or {}).items() if value is not None}


def _encode_id(value) -> str:
     return quote(str(value), safe="")


def _form_fields(data: Dict[str, Any]) -> Dict[str, str]:
     """Multipart text fields: lists become JSON, booleans lowercase."""
     fields = {}
     for key, value in data.items():
          if value is None:
               continue
          if isinstance(value, (list, dict)):
               fields[key] = json.dumps(value)
          elif isinstance(value, bool):
               fields[key] = "true" if value else "false"
          else:
               fields[key] = str(value)
     return fields


class ApiClient:
     """Bearer-authenticated wrapper around a requests.Session."""

     def __init__(
          self,
          base_url: Optional[str] = None,
          token: Optional[str] = None,
          token_provider: Optional[Callable[[], Optional[str]]] = None,
          on_unauthorized: Optional[Callable[[], None]] = None,
          session: Optional[requests.Session] = None,
          timeout: float = 10,
     ):
          self.base_url = (base_url or os.getenv("SMARTRENT_API_URL") or DEFAULT_BASE_URL).rstrip("/")
          self.token = token
          self.token_provider = token_provider
          self.on_unauthorized = on_unauthorized
          self.session = session or requests.Session()
          self.timeout = timeout

          self.auth = AuthApi(self)
          self.properties = PropertiesApi(self)
          self.leases = LeasesApi(self)
          self.maintenance = MaintenanceApi(self)
          self.notifications = NotificationsApi(self)
          self.payments = PaymentsApi(self)
          self.applications = ApplicationsApi(self)
          self.admin = AdminApi(self)
          self.dashboard = DashboardApi(self)

     # -------------------------------------------------------------------------
     # Transport
     # -------------------------------------------------------------------------

     def _current_token(self) -> Optional[str]:
          if self.token_provider is not None:
               try:
                    return self.token_provider()
               except Exception:
                    logger.warning("Token provider failed; sending request without a token", exc_info=True)
                    return None
          return self.token

     def request(
          self,
          method: str,
          path: str,
          params: Optional[Dict[str, Any]] = None,
          json: Any = None,
          data: Optional[Dict[str, Any]] = None,
          files: Any = None,
     ) -> Any:
          """
          Send a request and return the decoded JSON body (None when empty).

          Raises:
               AuthenticationError: 401
               ApiError: any other non-2xx status
          """
          headers = {"Accept": "application/json"}
          token = self._current_token()
          if token:
               headers["Authorization"] = f"Bearer {token}"

          response = self.session.request(
               method,
               f"{self.base_url}{path}",
               params=_clean(params),
               json=json,
               data=data,
               files=files,
               headers=headers,
               timeout=self.timeout,
          )
          body = self._decode(response)

          if response.status_code == 401:
               self.token = None
               if self.on_unauthorized is not None:
                    self.on_unauthorized()
               raise AuthenticationError(401, self._error_message(body, "Unauthorized"), body)
          if not response.ok:
               raise ApiError(response.status_code, self._error_message(body), body)
          return body

     @staticmethod
     def _decode(response: requests.Response) -> Any:
          if response.status_code == 204 or not response.content:
               return None
          try:
               return response.json()
          except ValueError:
               return None

     @staticmethod
     def _error_message(body: Any, default: str = "Request failed") -> str:
          if isinstance(body, dict):
               for key in ("error", "message"):
                    if isinstance(body.get(key), str) and body[key]:
                         return body[key]
          return default

     def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
          return self.request("GET", path, params=params)

     def post(self, path: str, json: Any = None, **kwargs) -> Any:
          return self.request("POST", path, json=json, **kwargs)

     def put(self, path: str, json: Any = None, **kwargs) -> Any:
          return self.request("PUT", path, json=json, **kwargs)

     def delete(self, path: str) -> Any:
          return self.request("DELETE", path)


class _Resource:
     def __init__(self, client: ApiClient):
          self.client = client


class AuthApi(_Resource):
     def register(self, **data) -> dict:
          result = self.client.post("/auth/register", data)
          self.client.token = result.get("token")
          return result

     def login(self, email: str, password: str, admin_id: Optional[str] = None) -> dict:
          payload = {"email": email, "password": password}
          if admin_id is not None:
               payload["admin_id"] = admin_id
          result = self.client.post("/auth/login", payload)
          self.client.token = result.get("token")
          return result

     def get_profile(self) -> dict:
          return self.client.get("/auth/me")

     def update_profile(self, **data) -> dict:
          return self.client.put("/auth/me", data)

     def upload_avatar(self, filename: str, content: bytes, content_type: str = "application/octet-stream") -> dict:
          return self.client.request("POST", "/auth/avatar", files={"avatar": (filename, content, content_type)})


class PropertiesApi(_Resource):
     def get_all(self, **filters) -> List[dict]:
          return [normalize_property(p) for p in extract_array(self.client.get("/properties", filters))]

     def get_by_id(self, property_id) -> dict:
          if property_id is None or property_id == "":
               raise ValueError("Property id is required")
          return normalize_property(self.client.get(f"/properties/{_encode_id(property_id)}"))

     def _send(self, method: str, path: str, data: dict, images):
          if images:
               files = [("images", image) for image in images]
               return self.client.request(method, path, data=_form_fields(data), files=files)
          return self.client.request(method, path, json=data)

     def create(self, data: dict, images=None) -> dict:
          """``images``: (filename, bytes, content_type) tuples, sent as multipart."""
          return self._send("POST", "/properties", data, images)

     def update(self, property_id, data: dict, images=None) -> dict:
          return self._send("PUT", f"/properties/{_encode_id(property_id)}", data, images)

     def delete(self, property_id) -> Any:
          return self.client.delete(f"/properties/{_encode_id(property_id)}")


class LeasesApi(_Resource):
     def get_all(self, **filters) -> List[dict]:
          return extract_array(self.client.get("/leases", filters))

     def get_by_id(self, lease_id) -> dict:
          return self.client.get(f"/leases/{_encode_id(lease_id)}")

     def create(self, data: dict) -> dict:
          return self.client.post("/leases", data)

     def update(self, lease_id, data: dict) -> dict:
          return self.client.put(f"/leases/{_encode_id(lease_id)}", data)

     def terminate(self, lease_id) -> dict:
          return self.client.delete(f"/leases/{_encode_id(lease_id)}")


class MaintenanceApi(_Resource):
     def get_all(self, **filters) -> List[dict]:
          return extract_array(self.client.get("/maintenance", filters))

     def get_by_id(self, request_id) -> dict:
          return self.client.get(f"/maintenance/{_encode_id(request_id)}")

     def create(self, data: dict, images=None) -> dict:
          if images:
               files = [("images", image) for image in images]
               return self.client.request("POST", "/maintenance", data=_form_fields(data), files=files)
          return self.client.post("/maintenance", data)

     def update(self, request_id, data: dict) -> dict:
          return self.client.put(f"/maintenance/{_encode_id(request_id)}", data)


class NotificationsApi(_Resource):
     def get_all(self, **filters) -> List[dict]:
          return [normalize_notification(n) for n in extract_array(self.client.get("/notifications", filters))]

     def mark_read(self, notification_id) -> dict:
          return self.client.put(f"/notifications/{_encode_id(notification_id)}/read")

     def mark_unread(self, notification_id) -> dict:
          return self.client.put(f"/notifications/{_encode_id(notification_id)}/unread")

     def mark_all_read(self) -> dict:
          return self.client.put("/notifications/mark-all-read")

     def delete(self, notification_id) -> Any:
          return self.client.delete(f"/notifications/{_encode_id(notification_id)}")

     def get_unread_count(self) -> int:
          body = self.client.get("/notifications/unread/count") or {}
          return int(body.get("count", body.get("unreadCount", 0)))


class PaymentsApi(_Resource):
     def get_tenant_payments(self) -> List[dict]:
          return (self.client.get("/payments/tenant") or {}).get("payments", [])

     def get_landlord_payments(self) -> List[dict]:
          return (self.client.get("/payments/landlord") or {}).get("payments", [])

     def get_by_id(self, payment_id) -> dict:
          return self.client.get(f"/payments/{_encode_id(payment_id)}")

     def check_existing(self, tenant_id, property_id) -> bool:
          body = self.client.get(f"/payments/check-existing/{_encode_id(tenant_id)}/{_encode_id(property_id)}")
          return bool((body or {}).get("hasExistingPayments"))

     def create(self, data: dict) -> dict:
          return self.client.post("/payments/create", data)

     def initiate_stripe_payment(self, payment_id) -> dict:
          """Returns {clientSecret, paymentIntentId}."""
          return self.client.post(f"/payments/pay/{_encode_id(payment_id)}")

     def sync_payment(self, payment_id) -> dict:
          return self.client.post(f"/payments/sync/{_encode_id(payment_id)}")

     def cancel(self, payment_id) -> dict:
          return self.client.delete(f"/payments/{_encode_id(payment_id)}")


class ApplicationsApi(_Resource):
     def apply(self, property_id, message: str = "") -> dict:
          return self.client.post("/applications/apply", {"propertyId": property_id, "message": message})

     def get_tenant_applications(self) -> List[dict]:
          return (self.client.get("/applications/tenant") or {}).get("applications", [])

     def get_landlord_applications(self) -> List[dict]:
          return (self.client.get("/applications/landlord") or {}).get("applications", [])

     def approve(self, application_id, **lease_terms) -> dict:
          return self.client.post(f"/applications/{_encode_id(application_id)}/approve", lease_terms)

     def reject(self, application_id, reason: Optional[str] = None) -> dict:
          return self.client.post(f"/applications/{_encode_id(application_id)}/reject", {"reason": reason})


class AdminApi(_Resource):
     def overview(self) -> dict:
          return self.client.get("/admin/overview")

     def collection(self, name: str) -> dict:
          return self.client.get(f"/admin/collection/{_encode_id(name)}")

     def create(self, name: str, payload: dict) -> dict:
          return self.client.post(f"/admin/collection/{_encode_id(name)}", payload)

     def remove(self, name: str, row_id) -> Any:
          return self.client.delete(f"/admin/collection/{_encode_id(name)}/{_encode_id(row_id)}")


class DashboardApi(_Resource):
     def home(self) -> dict:
          return self.client.get("/dashboard/home")

     def _or_empty(self, fetch: Callable[[], list]) -> list:
          try:
               return fetch()
          except AuthenticationError:
               raise
          except ApiError as e:
               logger.warning("Dashboard data unavailable (%s): %s", e.status_code, e.message)
               return []

     def tenant_summary(self) -> dict:
          """
          Fetch the tenant's collections and aggregate them locally.

          A collection that fails to load counts as empty.
          """
          return tenant_summary(
               self._or_empty(self.client.properties.get_all),
               self._or_empty(self.client.leases.get_all),
               self._or_empty(self.client.maintenance.get_all),
               self._or_empty(self.client.payments.get_tenant_payments),
          )
