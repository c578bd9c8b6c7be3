from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from tinylink.core.config import DATABASE_URL

if DATABASE_URL.startswith("sqlite"):
    # needed for SQLite + FastAPI, requests run in a threadpool
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False, "timeout": 30},
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
