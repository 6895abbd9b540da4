# routers/forms.py
"""
Request body helpers for routes that take either JSON or multipart forms.
"""
from typing import Tuple

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError


async def read_body(request: Request) -> Tuple[dict, list]:
     """Return (fields, uploaded files) from a JSON or multipart request."""
     content_type = request.headers.get("content-type", "")
     if content_type.startswith("multipart/form-data"):
          form = await request.form()
          fields = {}
          files = []
          for key, value in form.multi_items():
               if hasattr(value, "filename"):
                    if value.filename:
                         files.append(value)
               else:
                    fields[key] = value
          return fields, files

     body = await request.body()
     if not body:
          return {}, []
     try:
          data = await request.json()
     except ValueError:
          raise RequestValidationError([{"loc": ("body",), "msg": "Invalid JSON body", "type": "json_invalid"}])
     if not isinstance(data, dict):
          raise RequestValidationError([{"loc": ("body",), "msg": "Expected a JSON object", "type": "dict_type"}])
     return data, []


def validate_fields(schema, fields: dict):
     """Validate raw fields against a schema, reporting errors like FastAPI does."""
     try:
          return schema.model_validate(fields)
     except ValidationError as e:
          raise RequestValidationError(e.errors(include_url=False))
