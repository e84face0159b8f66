"""
archive/models.py -- Pydantic v2 model for archive entries.

Every entry in the data document validates into an immutable ``Entity``.
Only ``id`` and ``name`` are required; every other field falls back to an
empty value when it is missing or ``null`` so that sparse records still
render.

Usage::

    from archive.models import Entity

    ann = Entity.model_validate({"id": "a", "name": "Ann", "dates": "1920-1930"})
    ann.lead_year        # 1920
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Recognised entry types.  The set is open-ended; anything else gets the
# default display treatment.
PERSON = "Person"
MOVEMENT = "Movement"
EVENT = "Event"

# Leading integer of a token, parsed the way JavaScript's parseInt does:
# optional whitespace, optional sign, then at least one ASCII digit.
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

_TEXT_FIELDS = ("type", "dates", "summary", "detail")
_LIST_FIELDS = ("key_terms", "sources", "connections")


def parse_lead_year(dates: str) -> int | None:
    """Return the year before the first ``-`` in *dates*, or ``None``.

    ``None`` stands in for an unparseable year ("c. 1900", "", "-500").
    """
    token = dates.split("-", 1)[0]
    match = _LEADING_INT.match(token)
    if match is None:
        return None
    return int(match.group(1))


class Entity(BaseModel):
    """One archive record: a Person, Movement or Event.

    ``connections`` holds the *names* of related entries.  They are resolved
    by exact name match at render time and may dangle.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str
    type: str = ""
    dates: str = ""
    summary: str = ""
    detail: str = ""
    key_terms: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()
    connections: tuple[str, ...] = ()

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _none_to_empty_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def lead_year(self) -> int | None:
        return parse_lead_year(self.dates)
