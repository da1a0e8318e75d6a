"""
Shared pydantic building blocks.

Store rows use snake_case columns and integer keys; the dashboard speaks
camelCase JSON with identifiers as decimal strings. CamelModel bridges both:
it accepts either spelling on input and serializes by alias.
"""
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _id_to_str(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


DecimalId = Annotated[str, BeforeValidator(_id_to_str), Field(pattern=r"^[0-9]+$")]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )


class OkResponse(BaseModel):
    ok: bool = True
