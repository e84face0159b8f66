"""
archive/search.py -- Text filter over the archive collection.

A query matches an entity when it is a case-insensitive substring of the
name, the summary, or any key term.  A blank query is "no filter".
"""

from __future__ import annotations

from collections.abc import Iterable

from archive.models import Entity


def is_blank(query: str | None) -> bool:
    """Return True if *query* is empty or whitespace only."""
    return not (query or "").strip()


def matches(entity: Entity, needle: str) -> bool:
    """Return True if the casefolded *needle* occurs in a searchable field."""
    if needle in entity.name.casefold():
        return True
    if needle in entity.summary.casefold():
        return True
    return any(needle in term.casefold() for term in entity.key_terms)


def filter_entities(entities: Iterable[Entity], query: str | None) -> list[Entity]:
    """Return the entities matching *query*, in collection order.

    Leading and trailing whitespace in *query* is ignored.  A blank query
    returns every entity unchanged.
    """
    items = list(entities)
    if is_blank(query):
        return items
    needle = query.strip().casefold()
    return [entity for entity in items if matches(entity, needle)]
