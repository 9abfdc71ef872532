# backend/stockroom/core/database.py

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

# range of the INTEGER columns on every supported backend
INT_MAX = 2**31 - 1


class Database:
    """Engine + session factory for one database URL.

    Built once by the application factory (or the seed command) and handed
    to whoever needs sessions.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url

        # SQLite needs check_same_thread, Postgres must NOT have it
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}

        self.engine = create_engine(url, connect_args=connect_args, echo=echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self):
        # import for side effect: registers tables on Base.metadata
        from stockroom import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    def dispose(self):
        self.engine.dispose()
