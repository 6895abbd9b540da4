# schemas/admin.py
from typing import Any, Dict, List

from .base import CamelModel


class CollectionResponse(CamelModel):
     data: List[Dict[str, Any]]
     columns: List[str]
     form_fields: List[str]


class OverviewResponse(CamelModel):
     data: Dict[str, List[Dict[str, Any]]]
