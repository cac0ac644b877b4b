# resource_tracker/main.py
import logging
from typing import Optional

from fastapi import FastAPI

from .config import Settings, get_settings
from .persistence import ResourcePersistence
from .router import router as resources_router
from .storage import JsonFileStorage, KeyValueStorage
from .store import ResourceStore


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
) -> FastAPI:
    """Build the application around a freshly loaded ``ResourceStore``.

    ``storage`` defaults to the JSON file named by the settings; tests
    pass a ``MemoryStorage`` instead.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    if storage is None:
        storage = JsonFileStorage(settings.data_file)
    persistence = ResourcePersistence(storage, key=settings.storage_key)

    app = FastAPI(
        title="Dev Resource Tracker",
        description=(
            "Local catalog of learning and reference resources: "
            "create, delete, search, filter and sort, persisted across sessions."
        ),
        version="1.0.0",
    )
    app.state.store = ResourceStore(persistence)
    app.include_router(resources_router)

    # quick liveness check
    @app.get("/")
    def health_check():
        return {"status": "ok", "resources": len(app.state.store)}

    return app
