from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from shared.core.config import INVENTORY_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": POOL_SIZE,          # max idle connections
        "max_overflow": MAX_OVERFLOW,    # max temporary extra connections
        "pool_timeout": 30,              # wait time before failing
    }


inventory_engine = create_engine(
    INVENTORY_DATABASE_URL, **_engine_options(INVENTORY_DATABASE_URL))
InventorySessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=inventory_engine)


# Dependency


def get_inventory_db():
    db = InventorySessionLocal()
    try:
        yield db
    finally:
        db.close()
