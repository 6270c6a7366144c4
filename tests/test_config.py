import logging

from mdnotes import config
from mdnotes.logger import configure_logging


def test_paths_follow_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("MDNOTES_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("MDNOTES_DB_PATH", raising=False)
    assert config.db_path() == tmp_path / "home" / "mdnotes.db"
    assert config.log_dir().is_dir()

    monkeypatch.setenv("MDNOTES_DB_PATH", str(tmp_path / "nested" / "notes.sqlite"))
    assert config.db_url() == f"sqlite:///{tmp_path / 'nested' / 'notes.sqlite'}"
    assert (tmp_path / "nested").is_dir()


def test_log_level(monkeypatch):
    monkeypatch.setenv("MDNOTES_LOG_LEVEL", "debug")
    assert config.log_level() == logging.DEBUG
    monkeypatch.setenv("MDNOTES_LOG_LEVEL", "chatty")
    assert config.log_level() == logging.INFO


def test_cloud_sync_flag_is_inert(monkeypatch):
    monkeypatch.setenv("MDNOTES_CLOUD_SYNC", "1")
    assert config.cloud_sync_requested() is True
    assert config.cloud_sync_enabled() is False


def test_configure_logging_writes_to_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("MDNOTES_HOME", str(tmp_path))
    monkeypatch.setenv("MDNOTES_CLOUD_SYNC", "yes")
    logger = logging.getLogger(config.APP_NAME)
    saved = logger.handlers[:]
    logger.handlers.clear()
    try:
        assert configure_logging() is logger
        assert len(logger.handlers) == 2
        assert configure_logging() is logger
        assert len(logger.handlers) == 2
        for handler in logger.handlers:
            handler.flush()
        log_file = tmp_path / "logs" / "mdnotes.log"
        assert "cloud sync is not supported" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers[:] = saved
        logger.setLevel(logging.NOTSET)
