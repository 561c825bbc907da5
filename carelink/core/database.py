"""
SQLAlchemy database setup (MySQL in production, SQLite for local runs and tests)
"""
from contextlib import contextmanager
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
import logging

# Base is created before the config import so models can import it freely
Base = declarative_base()

from carelink.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def _engine_options(url: str) -> dict:
    """Pool options for the configured backend"""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "poolclass": QueuePool,
        "pool_size": 20,
        "max_overflow": 30,
        "pool_pre_ping": True,
        "pool_recycle": 3600,  # recycle connections every hour
    }


engine = create_engine(
    settings.database_url,
    echo=settings.DEBUG,
    **_engine_options(settings.database_url)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency yielding one session per request.

    The session is rolled back when the request fails and is always closed.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def session_scope():
    """Transactional scope for scripts: commit on success, rollback on error"""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables():
    """
    Create every table that does not exist yet
    """
    # Register all models on the metadata
    import carelink.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Tables created/verified")
    except Exception as e:
        logger.error(f"❌ Error creating tables: {e}")
        raise


def drop_tables():
    """
    Drop every table (use with care)
    """
    try:
        Base.metadata.drop_all(bind=engine)
        logger.warning("⚠️ All tables have been dropped")
    except Exception as e:
        logger.error(f"❌ Error dropping tables: {e}")
        raise


def test_connection() -> bool:
    """
    Check that the database answers a trivial query
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return True
    except Exception as e:
        logger.error(f"❌ Database connection error: {e}")
        return False


def get_db_info():
    """
    Basic information about the connected database
    """
    try:
        with engine.connect() as conn:
            version = conn.dialect.server_version_info
            return {
                "dialect": engine.dialect.name,
                "server_version": ".".join(str(part) for part in version) if version else None,
                "database_name": engine.url.database,
                "host": engine.url.host,
                "port": engine.url.port,
            }
    except Exception as e:
        logger.error(f"Error reading database info: {e}")
        return None
