import pytest

from mdnotes.store import NoteStore


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.setenv("MDNOTES_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("MDNOTES_DB_PATH", str(tmp_path / "notes.sqlite"))
    s = NoteStore.open()
    yield s
    s.close()
