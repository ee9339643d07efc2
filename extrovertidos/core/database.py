from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from extrovertidos.core.config import settings

def _connect_args(url: str) -> dict:
    """Driver-level bound on every statement, writes included."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": settings.BACKEND_QUERY_TIMEOUT}
    if url.startswith("postgresql"):
        return {"options": f"-c statement_timeout={int(settings.BACKEND_QUERY_TIMEOUT * 1000)}"}
    return {}

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args(settings.DATABASE_URL), pool_pre_ping=True)

# Rows are turned into dicts after commit, so keep attributes loaded
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

Base = declarative_base()

def init_db(bind=None):
    """Create every table registered on Base."""
    from extrovertidos.models import profile, event, business, category, notification, user_ban  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
