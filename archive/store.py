"""
archive/store.py -- One-shot loader and read-only entity collection.

The store reads the data document exactly once, validates it into
``Entity`` records and keeps them for the rest of the session.  There is
no reload, retry or partial-failure policy: a failed load is terminal.

Usage::

    from archive.store import EntityStore

    store = EntityStore("data.json")
    store.load()                      # raises UnreachableError / MalformedError
    ann = store.get("ann-001")        # raises EntityNotFoundError
"""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.request
from collections.abc import Iterator

from pydantic import TypeAdapter, ValidationError

from archive.errors import EntityNotFoundError, MalformedError, UnreachableError
from archive.models import Entity
from archive.utils import is_url

logger = logging.getLogger(__name__)

_ENTITY_LIST = TypeAdapter(list[Entity])

# Timeout (seconds) for reading a remote data document
URL_TIMEOUT = 30


class EntityStore:
    """Immutable snapshot of the archive collection.

    Parameters
    ----------
    source : str or os.PathLike
        Filesystem path or ``http(s)://`` URL of the JSON document.
    """

    def __init__(self, source):
        self._source = source if is_url(source) else os.fspath(source)
        self._entities: tuple[Entity, ...] | None = None
        self._by_id: dict[str, Entity] = {}
        self._attempted = False

    @classmethod
    def from_entities(cls, entities, source: str = "<memory>") -> EntityStore:
        """Build an already-loaded store from in-memory records (tests, tools)."""
        store = cls(source)
        store._attempted = True
        store._install(
            [e if isinstance(e, Entity) else Entity.model_validate(e) for e in entities]
        )
        return store

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        return str(self._source)

    @property
    def is_loaded(self) -> bool:
        return self._entities is not None

    def load(self) -> tuple[Entity, ...]:
        """Read and validate the data document.

        Returns
        -------
        tuple[Entity, ...]
            The collection in document order.

        Raises
        ------
        UnreachableError
            The document could not be read.
        MalformedError
            The document is not valid JSON or does not match the schema.
        RuntimeError
            ``load()`` was already called on this store.
        """
        if self._attempted:
            raise RuntimeError("EntityStore.load() may only be called once per session.")
        self._attempted = True

        raw = self._read()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedError(self.source, f"invalid JSON: {e}") from e

        if not isinstance(payload, list):
            raise MalformedError(
                self.source,
                f"expected a list of entries, got {type(payload).__name__}",
            )

        try:
            entities = _ENTITY_LIST.validate_python(payload)
        except ValidationError as e:
            raise MalformedError(
                self.source, f"{e.error_count()} schema error(s): {e}"
            ) from e

        self._install(entities)
        logger.info("Loaded %d archive entries from %s", len(entities), self.source)
        return self.entities

    def _read(self) -> str:
        if is_url(self._source):
            try:
                with urllib.request.urlopen(self._source, timeout=URL_TIMEOUT) as resp:
                    return resp.read().decode("utf-8")
            except (urllib.error.URLError, OSError) as e:
                raise UnreachableError(self.source, str(e)) from e
            except UnicodeDecodeError as e:
                raise MalformedError(self.source, f"not UTF-8 text: {e}") from e

        try:
            with open(self._source, "r", encoding="utf-8") as fh:
                return fh.read()
        except UnicodeDecodeError as e:
            raise MalformedError(self.source, f"not UTF-8 text: {e}") from e
        except OSError as e:
            raise UnreachableError(self.source, str(e)) from e

    def _install(self, entities: list[Entity]) -> None:
        by_id: dict[str, Entity] = {}
        for entity in entities:
            if entity.id in by_id:
                raise MalformedError(self.source, f"duplicate entry id {entity.id!r}")
            by_id[entity.id] = entity
        self._by_id = by_id
        self._entities = tuple(entities)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def _require_loaded(self) -> tuple[Entity, ...]:
        if self._entities is None:
            raise RuntimeError("Archive data has not been loaded yet.")
        return self._entities

    @property
    def entities(self) -> tuple[Entity, ...]:
        return self._require_loaded()

    def get(self, entity_id: str) -> Entity:
        """Return the entity with *entity_id*.

        Raises
        ------
        EntityNotFoundError
            No such entity.
        """
        self._require_loaded()
        try:
            return self._by_id[entity_id]
        except KeyError:
            raise EntityNotFoundError(entity_id) from None

    def __len__(self) -> int:
        return len(self.entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)
