# services/admin_service.py
"""
Admin Service - generic access to whole collections for the admin table.
"""
import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from sqlalchemy import Boolean, Date, DateTime, Integer, Numeric, String, inspect
from sqlalchemy.orm import Session

from models import Lease, MaintenanceRequest, Notification, Payment, Property, User
from services.auth_service import AuthService
from services.errors import NotFoundError
from services.export_service import build_columns, form_fields, is_system_field, normalize_rows

logger = logging.getLogger(__name__)

COLLECTIONS = {
     "users": User,
     "properties": Property,
     "leases": Lease,
     "maintenance": MaintenanceRequest,
     "notifications": Notification,
     "payments": Payment,
}


def get_model(name: str):
     model = COLLECTIONS.get(name)
     if model is None:
          raise NotFoundError(f"Unknown collection: {name}")
     return model


def _coerce(column, value):
     """Turn JSON input into something the column accepts."""
     if value is None:
          return None
     column_type = column.type
     if isinstance(column_type, Boolean):
          if isinstance(value, bool):
               return value
          if isinstance(value, int) and value in (0, 1):
               return bool(value)
          if isinstance(value, str) and value.strip().lower() in ("true", "false"):
               return value.strip().lower() == "true"
          raise ValueError(f"expected a boolean, got {value!r}")
     if isinstance(column_type, Integer):
          if isinstance(value, bool):
               raise ValueError(f"expected an integer, got {value!r}")
          if isinstance(value, int):
               return value
          if isinstance(value, str) and value.strip().lstrip("-").isdigit():
               return int(value.strip())
          raise ValueError(f"expected an integer, got {value!r}")
     if isinstance(column_type, Numeric):
          if isinstance(value, bool) or not isinstance(value, (int, float, str)):
               raise ValueError(f"expected a number, got {value!r}")
          try:
               number = Decimal(str(value).strip())
          except InvalidOperation:
               raise ValueError(f"expected a number, got {value!r}")
          if not number.is_finite():
               raise ValueError(f"expected a number, got {value!r}")
          return number
     if isinstance(column_type, DateTime):
          if not isinstance(value, str):
               raise ValueError(f"expected an ISO datetime, got {value!r}")
          return datetime.fromisoformat(value.replace("Z", "+00:00"))
     if isinstance(column_type, Date):
          if not isinstance(value, str):
               raise ValueError(f"expected an ISO date, got {value!r}")
          return date.fromisoformat(value[:10])
     if isinstance(value, (dict, list)):
          return json.dumps(value)
     if isinstance(column_type, String) and not isinstance(value, str):
          return str(value)
     return value


class AdminService:
     """Service class for the admin collection views."""

     @staticmethod
     def list_rows(db: Session, name: str) -> List[Dict[str, Any]]:
          model = get_model(name)
          return [row.to_dict() for row in db.query(model).order_by(model.id).all()]

     @staticmethod
     def overview(db: Session) -> Dict[str, List[Dict[str, Any]]]:
          return {name: AdminService.list_rows(db, name) for name in COLLECTIONS}

     @staticmethod
     def collection(db: Session, name: str) -> Dict[str, Any]:
          """Rows plus the inferred columns and add-row form fields."""
          rows = normalize_rows(AdminService.list_rows(db, name))
          columns = build_columns(rows)
          return {"data": rows, "columns": columns, "form_fields": form_fields(columns)}

     @staticmethod
     def create_row(db: Session, name: str, payload: Dict[str, Any]) -> Dict[str, Any]:
          """
          Insert a row from an arbitrary JSON object.

          System fields (id, timestamps, underscored keys) are ignored. A
          ``password`` given for a user is hashed.

          Raises:
               ValueError: Payload is not an object or names unknown columns
          """
          model = get_model(name)
          if not isinstance(payload, dict):
               raise ValueError("JSON must be an object")

          columns = {column.key: column for column in inspect(model).mapper.column_attrs}
          values = {key: value for key, value in payload.items() if not is_system_field(key)}
          unknown = sorted(set(values) - set(columns))
          if unknown:
               raise ValueError(f"Unknown fields for {name}: {', '.join(unknown)}")

          kwargs = {}
          for key, value in values.items():
               try:
                    kwargs[key] = _coerce(columns[key].columns[0], value)
               except ValueError as e:
                    raise ValueError(f"Invalid value for {key}: {e}") from e
          if model is User and kwargs.get("password"):
               kwargs["password"] = AuthService.hash_password(str(kwargs["password"]))

          row = model(**kwargs)
          db.add(row)
          db.flush()
          logger.info("Admin created %s row %s", name, row.id)
          return row.to_dict()

     @staticmethod
     def delete_row(db: Session, name: str, row_id: int) -> None:
          model = get_model(name)
          row = db.query(model).filter(model.id == row_id).first()
          if not row:
               raise NotFoundError(f"{name} row {row_id} not found")
          db.delete(row)
          db.flush()
          logger.info("Admin deleted %s row %s", name, row_id)
