import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./thamara.db")

class Base(DeclarativeBase):
    pass

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db():
    # Register catalog tables before creating them
    import scoring.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def get_db():
    # Catalog access is read-only: never commit
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
