import logging
from functools import lru_cache

from app.core.config import DATA_DIR, STORAGE_BACKEND
from app.database.stores import DataStore, JsonFileStore, SqlAlchemyStore

logger = logging.getLogger("uvicorn.error")


def build_store(backend: str = STORAGE_BACKEND) -> DataStore:
    if backend == "sql":
        from app.database.base import Base
        from app.database.session import SessionLocal, engine

        Base.metadata.create_all(bind=engine)
        logger.info("Using SQL store at %s", engine.url)
        return SqlAlchemyStore(SessionLocal)
    if backend != "json":
        raise RuntimeError(f"Unknown STORAGE_BACKEND {backend!r}. Use 'json' or 'sql'.")
    logger.info("Using JSON file store in %s", DATA_DIR)
    return JsonFileStore(DATA_DIR)


@lru_cache(maxsize=1)
def get_store() -> DataStore:
    return build_store()
