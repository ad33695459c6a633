# stockwatch/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from stockwatch.core.config import settings


def build_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # Sessions are handed to FastAPI's worker threads
        connect_args["check_same_thread"] = False

    new_engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)

    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)

    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
