# consulta_prod/core/schemas.py
"""Shared pydantic building blocks for the API schemas."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Snake_case attributes on the Python side, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True, use_enum_values=True
    )


class Page(BaseModel, Generic[T]):
    """A page of results plus the size of the whole matching set."""

    data: List[T]
    total: int
