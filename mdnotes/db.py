"""SQLModel engine wrapper for the note database."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine

from . import config
from .errors import StoreOpenFailure

_LOG = logging.getLogger(__name__)


class Database:
    """One engine per database file; the URL defaults to the configured path."""

    def __init__(self, url: Optional[str] = None) -> None:
        self._url = url
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(self._url or config.db_url(), echo=False)
        return self._engine

    def initialise(self) -> None:
        """Create the tables. Any failure here is fatal for the caller."""
        from . import models  # noqa: F401  registers the note table

        try:
            engine = self.engine
            SQLModel.metadata.create_all(engine)
        except (SQLAlchemyError, OSError) as exc:
            _LOG.critical("Unable to open note store: %s", exc)
            raise StoreOpenFailure(f"cannot open note store: {exc}") from exc
        _LOG.info("Note store ready at %s", engine.url)

    @contextmanager
    def session(self) -> Iterator[Session]:
        # objects stay readable after commit; callers get detached notes back
        session = Session(self.engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
