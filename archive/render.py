"""
archive/render.py -- Pure view builders.

Each function turns entities into a frozen description of one view.  The
descriptions carry entity ids, never callbacks, so the GUI decides what a
click does.  None of these functions keep state between calls.

Trust boundary: ``DetailView.detail_html`` is the entry's ``detail`` field
passed through untouched.  The data document is assumed safe; a deployment
that accepts untrusted documents must sanitise it before display.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from archive.models import EVENT, MOVEMENT, PERSON, Entity
from archive.notes import detail_key

SECONDS_PER_DAY = 86400

PERSONS_EMPTY_MESSAGE = "No Persons found matching your search."
MOVEMENTS_EMPTY_MESSAGE = "No Movements/Events found matching your search."


# ---------------------------------------------------------------------------
# View descriptions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Card:
    entity_id: str
    name: str
    type: str
    key_terms: str


@dataclass(frozen=True)
class GridBucket:
    cards: tuple[Card, ...]
    empty_message: str

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)


@dataclass(frozen=True)
class GridViews:
    persons: GridBucket
    movements: GridBucket


@dataclass(frozen=True)
class TimelineEntry:
    entity_id: str
    dates: str
    name: str
    type: str
    summary: str
    year: int | None


@dataclass(frozen=True)
class DetailView:
    entity_id: str
    title: str
    period: str
    detail_html: str
    sources: tuple[str, ...]
    note_key: str


@dataclass(frozen=True)
class DailyCard:
    entity_id: str
    title: str
    period: str
    summary: str


@dataclass(frozen=True)
class MindMapNode:
    id: str
    label: str
    tooltip: str
    category: str


@dataclass(frozen=True)
class MindMapEdge:
    source: str
    target: str


@dataclass(frozen=True)
class MindMap:
    nodes: tuple[MindMapNode, ...]
    edges: tuple[MindMapEdge, ...]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _card(entity: Entity) -> Card:
    return Card(
        entity_id=entity.id,
        name=entity.name,
        type=entity.type,
        key_terms=", ".join(entity.key_terms),
    )


def render_grids(entities: Iterable[Entity]) -> GridViews:
    """Partition *entities* into the persons and movements/events grids.

    Entries whose type is not Person, Movement or Event appear in neither.
    """
    persons: list[Card] = []
    movements: list[Card] = []
    for entity in entities:
        if entity.type == PERSON:
            persons.append(_card(entity))
        elif entity.type in (MOVEMENT, EVENT):
            movements.append(_card(entity))
    return GridViews(
        persons=GridBucket(tuple(persons), PERSONS_EMPTY_MESSAGE),
        movements=GridBucket(tuple(movements), MOVEMENTS_EMPTY_MESSAGE),
    )


def _timeline_key(entity: Entity) -> tuple[bool, int]:
    year = entity.lead_year
    # Undated entries sort after every dated one
    return (year is None, year if year is not None else 0)


def render_timeline(entities: Iterable[Entity]) -> list[TimelineEntry]:
    """Return the entries ordered by leading year.

    ``sorted`` is stable, so entries sharing a year keep collection order.
    """
    ordered = sorted(entities, key=_timeline_key)
    return [
        TimelineEntry(
            entity_id=e.id,
            dates=e.dates,
            name=e.name,
            type=e.type,
            summary=e.summary,
            year=e.lead_year,
        )
        for e in ordered
    ]


def render_detail(entity: Entity) -> DetailView:
    return DetailView(
        entity_id=entity.id,
        title=entity.name,
        period=f"Period: {entity.dates}",
        detail_html=entity.detail,
        sources=tuple(entity.sources),
        note_key=detail_key(entity.id),
    )


def day_index(now: float) -> int:
    """Return the number of whole UTC days since the Unix epoch at *now*."""
    return math.floor(now / SECONDS_PER_DAY)


def daily_pick(entities: Sequence[Entity], now: float) -> Entity:
    """Return the entity highlighted on the calendar day containing *now*.

    The pick is constant for a whole UTC day and needs no stored state.

    Raises
    ------
    ValueError
        *entities* is empty.
    """
    if not entities:
        raise ValueError("daily_pick() needs a non-empty collection")
    return entities[day_index(now) % len(entities)]


def render_daily(entity: Entity) -> DailyCard:
    return DailyCard(
        entity_id=entity.id,
        title=f"{entity.name} ({entity.type})",
        period=f"Period: {entity.dates}",
        summary=entity.summary,
    )


def render_mind_map(entities: Iterable[Entity]) -> MindMap:
    """Describe the relationship diagram as nodes and directed edges.

    One node per entity.  One edge per connection whose target name matches
    an entity exactly (first match wins); other names produce nothing.
    """
    items = list(entities)
    by_name: dict[str, Entity] = {}
    for entity in items:
        by_name.setdefault(entity.name, entity)

    nodes = tuple(
        MindMapNode(id=e.id, label=e.name, tooltip=e.summary, category=e.type)
        for e in items
    )
    edges: list[MindMapEdge] = []
    for source in items:
        for target_name in source.connections:
            target = by_name.get(target_name)
            if target is not None:
                edges.append(MindMapEdge(source=source.id, target=target.id))
    return MindMap(nodes=nodes, edges=tuple(edges))
