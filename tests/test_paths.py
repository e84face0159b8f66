"""
Tests for viewer/paths.py and the command line in viewer/main.py.
"""

import os

from viewer import paths
from archive.notes import NoteStore
from viewer.main import _build_note_store, _parse_args


class TestResolveDataSource:
    def test_cli_value_wins(self, monkeypatch):
        monkeypatch.setenv(paths.DATA_ENV_VAR, "/from/env.json")
        assert paths.resolve_data_source("/from/cli.json") == "/from/cli.json"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(paths.DATA_ENV_VAR, "https://example.org/data.json")
        assert paths.resolve_data_source() == "https://example.org/data.json"

    def test_user_copy_before_bundle(self, monkeypatch, tmp_path):
        monkeypatch.delenv(paths.DATA_ENV_VAR, raising=False)
        monkeypatch.setattr(paths, "user_data_dir", lambda *a, **kw: str(tmp_path))
        (tmp_path / paths.DATA_FILE_NAME).write_text("[]", encoding="utf-8")
        assert paths.resolve_data_source() == os.path.join(str(tmp_path), paths.DATA_FILE_NAME)

    def test_falls_back_to_bundle(self, monkeypatch, tmp_path):
        monkeypatch.delenv(paths.DATA_ENV_VAR, raising=False)
        monkeypatch.setattr(paths, "user_data_dir", lambda *a, **kw: str(tmp_path / "empty"))
        expected = os.path.join(paths.get_bundle_dir(), paths.DATA_FILE_NAME)
        assert paths.resolve_data_source() == expected

    def test_bundle_dir_is_project_root(self, project_root):
        assert not paths.is_frozen()
        assert os.path.normcase(paths.get_bundle_dir()) == os.path.normcase(project_root)

    def test_bundled_sample_loads(self, project_root):
        from archive.store import EntityStore
        store = EntityStore(os.path.join(project_root, paths.DATA_FILE_NAME))
        assert len(store.load()) > 0


class TestParseArgs:
    def test_defaults(self):
        args = _parse_args([])
        assert args.data is None
        assert args.debug is False
        assert args.notes_file is None

    def test_options(self):
        args = _parse_args(["--data", "x.json", "--debug"])
        assert args.data == "x.json"
        assert args.debug is True

    def test_notes_file_option(self):
        args = _parse_args(["--notes-file", "notes.json"])
        assert args.notes_file == "notes.json"


class TestBuildNoteStore:
    def test_no_file_means_default_store(self):
        assert _build_note_store(None) is None
        assert _build_note_store("") is None

    def test_file_backed_store(self, tmp_path):
        path = tmp_path / "sub" / "notes.json"
        notes = _build_note_store(str(path))
        assert isinstance(notes, NoteStore)
        notes.save("homeNotes", "kept on disk")
        assert path.exists()
        assert _build_note_store(str(path)).load("homeNotes") == "kept on disk"
