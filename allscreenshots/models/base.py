from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every shape exchanged with the API.

    Fields are snake_case in Python and camelCase on the wire. Either spelling
    is accepted on input, and keys the SDK does not know are ignored so newer
    service versions keep decoding.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class RequestModel(ApiModel):
    """Request bodies are immutable once built."""

    model_config = ConfigDict(frozen=True)
