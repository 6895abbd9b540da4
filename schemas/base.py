# schemas/base.py
"""
Shared pydantic configuration.

Lease, application, payment and notification payloads travel in camelCase;
property and maintenance payloads in snake_case. Both spellings are accepted
on input.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          from_attributes=True,
     )


class SnakeModel(BaseModel):
     model_config = ConfigDict(
          populate_by_name=True,
          from_attributes=True,
     )
