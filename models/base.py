# models/base.py
import enum
import re
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase, declared_attr


def utc_now() -> datetime:
     """Naive UTC timestamp, matching the naive DateTime columns."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and a plain-dict view of a row.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: MaintenanceRequest -> maintenance_requests
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'

     # Columns never exposed through generic row views
     __hidden_columns__: tuple = ()

     def to_dict(self) -> dict:
          """Column values keyed by column name, JSON friendly."""
          row = {}
          for column in inspect(self).mapper.column_attrs:
               if column.key in self.__hidden_columns__:
                    continue
               row[column.key] = _plain(getattr(self, column.key))
          return row


def _plain(value):
     if isinstance(value, enum.Enum):
          return value.value
     if isinstance(value, Decimal):
          return float(value)
     if isinstance(value, (datetime, date)):
          return value.isoformat()
     return value
