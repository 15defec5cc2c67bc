# prodirectory/db/base.py
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from prodirectory.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # request handlers run in a threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the format stored in every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
