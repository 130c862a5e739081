"""Shared model configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model exchanged with the web client, which speaks camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
