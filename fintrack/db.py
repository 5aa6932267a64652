from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from fintrack import config

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE RESTRICT/CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Persistence handle shared by the category store and the ledger.

    Created once at process start and disposed at shutdown. Every store
    operation runs inside one ``session()`` block, which commits on success
    and rolls back on any exception.
    """

    def __init__(self, url: str = None, echo: bool = None):
        self.url = url or config.DATABASE_URL
        echo = config.SQL_ECHO if echo is None else echo

        kwargs = {}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url or self.url == "sqlite://":
                # one shared connection, otherwise each session sees an empty db
                kwargs["poolclass"] = StaticPool

        self.engine: Engine = create_engine(self.url, echo=echo, future=True, **kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.sessionlocal = sessionmaker(bind=self.engine, expire_on_commit=False, future=True)

    def init_db(self):
        # imported for the side effect of registering the tables on Base
        from fintrack import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self):
        from fintrack import models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self):
        db = self.sessionlocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()
