"""
Shared pytest fixtures for the Unity Archive test suite.

Provides:
    - project_root: path to the real project root
    - ann_bob: the two-entry Ann/Bob collection
    - sample_records: a mixed collection of persons, movements and events
    - sample_store: an already-loaded EntityStore over sample_records
    - data_file: sample_records written to a JSON file in tmp_path
    - memory_notes: a NoteStore over an in-memory backend
"""

import json
import os
import sys
from pathlib import Path

import pytest

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# ---------------------------------------------------------------------------
# Ensure archive/ and viewer/ are importable regardless of where pytest is invoked
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from archive.notes import MemoryBackend, NoteStore  # noqa: E402
from archive.store import EntityStore  # noqa: E402


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root():
    """Return the absolute path to the real project root directory."""
    return str(PROJECT_ROOT)


@pytest.fixture
def ann_bob():
    """Ann (1920s) connects to Bob (1900s); Bob connects to nobody."""
    return [
        {"id": "a", "name": "Ann", "dates": "1920-1930", "type": "Person", "connections": ["Bob"]},
        {"id": "b", "name": "Bob", "dates": "1900-1910", "type": "Person"},
    ]


@pytest.fixture
def sample_records():
    """Return a small archive with every entry type and a few awkward fields."""
    return [
        {
            "id": "ida-wells",
            "name": "Ida B. Wells",
            "type": "Person",
            "dates": "1862-1931",
            "summary": "Investigative journalist and anti-lynching crusader.",
            "detail": "<p>Co-founder of the <b>NAACP</b>.</p>",
            "key_terms": ["journalism", "NAACP"],
            "sources": ["Southern Horrors (1892)", "Crusade for Justice (1970)"],
            "connections": ["Niagara Movement", "Nobody Known"],
        },
        {
            "id": "niagara",
            "name": "Niagara Movement",
            "type": "Movement",
            "dates": "1905-1910",
            "summary": "Civil rights organization founded by W. E. B. Du Bois.",
            "detail": "",
            "key_terms": ["Du Bois", "civil rights"],
            "sources": [],
            "connections": ["Ida B. Wells"],
        },
        {
            "id": "montgomery",
            "name": "Montgomery Bus Boycott",
            "type": "Event",
            "dates": "1955-1956",
            "summary": "Year-long protest against segregated seating.",
            "detail": "<p>Sparked by Rosa Parks.</p>",
            "key_terms": ["boycott", "segregation"],
            "sources": ["Stride Toward Freedom (1958)"],
            "connections": ["Niagara Movement"],
        },
        {
            "id": "du-bois",
            "name": "W. E. B. Du Bois",
            "type": "Person",
            "dates": "1868-1963",
            "summary": "Sociologist, historian and activist.",
            "detail": "<p>Author of <i>The Souls of Black Folk</i>.</p>",
            "key_terms": ["sociology", "Pan-Africanism"],
            "sources": None,
            "connections": None,
        },
        {
            "id": "undated",
            "name": "Oral Histories Collection",
            "type": "Archive",
            "dates": "c. unknown",
            "summary": "Recorded interviews.",
        },
    ]


@pytest.fixture
def sample_store(sample_records):
    """Return a loaded EntityStore over sample_records."""
    return EntityStore.from_entities(sample_records)


@pytest.fixture
def data_file(tmp_path, sample_records):
    """Write sample_records to a JSON file and return its path."""
    path = tmp_path / "data.json"
    with open(str(path), "w", encoding="utf-8") as fh:
        json.dump(sample_records, fh, indent=2, ensure_ascii=False)
    return str(path)


@pytest.fixture
def memory_notes():
    """Return a NoteStore backed by a fresh in-memory backend."""
    return NoteStore(MemoryBackend())
