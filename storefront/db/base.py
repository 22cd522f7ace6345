from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy import create_engine
from storefront.core.config import settings


def _engine_options(database_url: str) -> dict:
    """Pool options only apply to server databases"""
    if database_url.startswith("sqlite"):
        return {"echo": settings.DB_ECHO, "connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_MIN_CONNECTIONS,
        "max_overflow": settings.DB_MAX_CONNECTIONS - settings.DB_MIN_CONNECTIONS,
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,
    }


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create declarative base for models
Base = declarative_base()


def get_db_session():
    """
    Dependency for getting DB session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
