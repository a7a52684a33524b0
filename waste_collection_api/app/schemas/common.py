"""
Field types shared by the entity schemas.

Identifiers are 64-bit integers in the database but are emitted as
strings in JSON so that clients without arbitrary-precision integers
never round them.  Decimal amounts never go through ``float``: a float
supplied in a request is converted from its shortest text form, and
amounts are written to JSON as strings.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def _float_to_text(value: Any) -> Any:
    if isinstance(value, float):
        return repr(value)
    return value


def _as_text(value: Any) -> str:
    return str(value)


Identifier = Annotated[int, PlainSerializer(_as_text, return_type=str, when_used="json")]

Amount = Annotated[
    Decimal,
    BeforeValidator(_float_to_text),
    PlainSerializer(_as_text, return_type=str, when_used="json"),
]
