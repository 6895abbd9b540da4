# services/export_service.py
"""
Row shaping and export helpers for the admin collection tables.

Rows are plain dicts (as produced by Model.to_dict). Values are rendered the
way a browser would print them, so exported files look the same whether
they were produced here or by the dashboard: ``True`` becomes ``true``,
``5.0`` becomes ``5`` and ``None`` an empty cell.
"""
import json
import math
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

COLLECTION_COLUMN = "__collection"
COLUMN_SAMPLE_SIZE = 50
SYSTEM_FIELDS = {"id", "createdAt", "updatedAt", "updatedBy", "created_at", "updated_at"}

# Sentinel for "leave this field out of the payload"
OMIT = object()


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------

def _json_default(value):
     if isinstance(value, (datetime, date)):
          return value.isoformat()
     if isinstance(value, Decimal):
          return float(value)
     raise TypeError(f"{type(value).__name__} is not JSON serializable")


def to_json(value, indent: Optional[int] = None) -> str:
     """Compact JSON (or indented when ``indent`` is given)."""
     if indent is None:
          return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)
     return json.dumps(value, indent=indent, ensure_ascii=False, default=_json_default)


def _number_text(value) -> str:
     if isinstance(value, Decimal):
          value = float(value)
     if isinstance(value, float):
          if math.isnan(value):
               return "NaN"
          if math.isinf(value):
               return "Infinity" if value > 0 else "-Infinity"
          if value.is_integer():
               return str(int(value))
          return repr(value)
     return str(value)


def js_string(value) -> str:
     """String conversion as done when a value is written into a CSV cell."""
     if value is None:
          return ""
     if isinstance(value, bool):
          return "true" if value else "false"
     if isinstance(value, (int, float, Decimal)):
          return _number_text(value)
     if isinstance(value, (datetime, date)):
          return value.isoformat()
     if isinstance(value, (dict, list)):
          return to_json(value)
     return str(value)


def cell_text(value) -> str:
     """Text shown in a table cell."""
     if value is None:
          return ""
     if isinstance(value, str):
          return value
     if isinstance(value, (bool, int, float, Decimal)):
          return js_string(value)
     try:
          return to_json(value)
     except (TypeError, ValueError):
          return str(value)


# -----------------------------------------------------------------------------
# Table shaping
# -----------------------------------------------------------------------------

def normalize_rows(rows: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
     """
     Give every row an ``id`` as its first key.

     A row that carries an ``id`` key keeps it, even when falsy. Otherwise
     falls back to ``uid``, then ``userId``, then the row's position.
     """
     normalized = []
     for index, row in enumerate(rows or []):
          row = row or {}
          if "id" in row:
               row_id = row["id"]
          else:
               row_id = row.get("uid") or row.get("userId") or str(index)
          out = {"id": row_id}
          out.update((key, value) for key, value in row.items() if key != "id")
          normalized.append(out)
     return normalized


def build_columns(rows: List[Dict[str, Any]]) -> List[str]:
     """Union of keys over the first rows, first-seen order, ``id`` first."""
     columns: List[str] = []
     seen = set()
     for row in rows[:COLUMN_SAMPLE_SIZE]:
          if not isinstance(row, dict):
               continue
          for key in row:
               if key not in seen:
                    seen.add(key)
                    columns.append(key)
     if "id" in seen:
          columns.remove("id")
          columns.insert(0, "id")
     return columns


def is_system_field(name: str) -> bool:
     return name in SYSTEM_FIELDS or name.startswith("_")


def form_fields(columns: List[str]) -> List[str]:
     """Editable columns for the add-row form; empty means raw JSON input."""
     return [column for column in columns if not is_system_field(column)]


def parse_value(raw: Optional[str]):
     """
     Interpret a form input.

     Returns OMIT for blank input; otherwise a bool, number, JSON object or
     list, or the raw (untrimmed) string.
     """
     if raw is None:
          return OMIT
     text = raw.strip()
     if text == "":
          return OMIT
     if text == "true":
          return True
     if text == "false":
          return False

     number = None
     if "_" not in text:
          try:
               return int(text)
          except ValueError:
               pass
          try:
               number = float(text)
          except ValueError:
               pass
     if number is not None and math.isfinite(number):
          return number

     if (text.startswith("{") and text.endswith("}")) or (text.startswith("[") and text.endswith("]")):
          try:
               return json.loads(text)
          except ValueError:
               pass
     return raw


def parse_form(fields: List[str], form: Dict[str, str]) -> Dict[str, Any]:
     payload = {}
     for field in fields:
          value = parse_value(form.get(field, ""))
          if value is not OMIT:
               payload[field] = value
     return payload


# -----------------------------------------------------------------------------
# Export
# -----------------------------------------------------------------------------

def flatten_object(obj, prefix: str = "", out: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
     """
     Flatten nested dicts into dotted keys; lists become JSON text.

     >>> flatten_object({"a": {"b": 1}, "tags": ["x"]})
     {'a.b': 1, 'tags': '["x"]'}
     """
     if out is None:
          out = {}
     if obj is None:
          out[prefix] = ""
          return out
     if not isinstance(obj, dict):
          out[prefix] = to_json(obj) if isinstance(obj, list) else obj
          return out

     for key, value in obj.items():
          full_key = f"{prefix}.{key}" if prefix else key
          if isinstance(value, dict) and value:
               flatten_object(value, full_key, out)
          elif isinstance(value, dict):
               continue
          else:
               out[full_key] = to_json(value) if isinstance(value, list) else value
     return out


def _escape_csv(value) -> str:
     text = js_string(value).replace('"', '""')
     if any(ch in text for ch in '",\n'):
          return f'"{text}"'
     return text


def _csv_lines(headers: List[str], rows: List[Dict[str, Any]]) -> str:
     lines = [",".join(headers)]
     for row in rows:
          lines.append(",".join(_escape_csv(row.get(header)) for header in headers))
     return "\n".join(lines)


def to_csv(rows: List[Dict[str, Any]]) -> str:
     """CSV for one collection; headers in first-seen order."""
     flat_rows = [flatten_object(row) for row in rows]
     headers: List[str] = []
     for row in flat_rows:
          for key in row:
               if key not in headers:
                    headers.append(key)
     return _csv_lines(headers, flat_rows)


def _all_collections_header_key(name: str):
     if name == COLLECTION_COLUMN:
          return (0, "", "")
     if name == "id":
          return (1, "", "")
     return (2, name.lower(), name)


def to_csv_all_collections(db: Dict[str, List[Dict[str, Any]]]) -> str:
     """
     One CSV for every collection, tagged by a leading ``__collection`` column.

     Header order: ``__collection``, ``id``, then the rest case-insensitively.
     """
     rows = []
     for name, docs in db.items():
          if not isinstance(docs, list):
               continue
          for doc in docs:
               flat = flatten_object(doc) if doc is not None else {}
               rows.append({COLLECTION_COLUMN: name, **flat})

     headers = set()
     for row in rows:
          headers.update(row)
     ordered = sorted(headers, key=_all_collections_header_key)
     return _csv_lines(ordered, rows)


def to_jsonl(rows: List[Dict[str, Any]]) -> str:
     return "\n".join(to_json(row) for row in rows)


def to_json_dump(data) -> str:
     return to_json(data, indent=2)


def export_filename(stamp: Optional[datetime] = None, ext: str = "csv") -> str:
     """smartrent-db-2026-10-17-08-30-00.csv"""
     stamp = stamp or datetime.now(timezone.utc)
     return f"smartrent-db-{stamp.strftime('%Y-%m-%d-%H-%M-%S')}.{ext}"
