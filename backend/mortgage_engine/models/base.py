"""Shared pydantic base for engine records.

Attributes are snake_case in Python; payloads may use either the attribute
name or its camelCase alias (``interestRate``, ``pmiConfig``), and responses
are emitted with the aliases.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, loc_by_alias=False)


class FrozenCamelModel(BaseModel):
    """Camel-aliased record that cannot be modified once built."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, loc_by_alias=False, frozen=True,
    )
