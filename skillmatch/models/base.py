"""Shared pydantic base for records that cross the engine boundary."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (``model_dump(by_alias=True)``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(BaseModel):
    """Immutable variant used for normalized engine inputs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
