import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from gallery.cleaning import query_filters
from gallery.config import Settings, load_settings
from gallery.models import ErrorMessage, QueryList, Record
from gallery.store import RecordStore

logger = logging.getLogger(__name__)

QUERY_PARSE_ERROR = "Error occurred when parsing your JSON query ! X( "


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _write_results(path: str, payload: list) -> None:
    """Overwrite the results file with the latest full dump."""
    try:
        Path(path).write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write results file %s: %s", path, exc)


def create_app(settings: Settings, store: Optional[RecordStore] = None) -> FastAPI:
    """
    Build the API. If `store` is given the caller owns it; otherwise the app
    opens settings.db_path on startup and closes it on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = store is None
        app.state.store = store if store is not None else RecordStore(settings.db_path)
        try:
            yield
        finally:
            if owned:
                app.state.store.close()

    app = FastAPI(title="Portfolio Gallery", lifespan=lifespan)
    app.state.settings = settings
    if store is not None:
        app.state.store = store

    @app.get("/health")
    def health(db: RecordStore = Depends(get_store)):
        return {"status": "ok", "records": db.count()}

    @app.get("/", response_model=List[Record])
    def query_full(
        db: RecordStore = Depends(get_store),
        cfg: Settings = Depends(get_settings),
    ):
        payload = [r.model_dump() for r in db.all()]
        _write_results(cfg.results_path, payload)
        return payload

    def _lookup(db: RecordStore, queries) -> list:
        details = []
        for q in queries:
            found = db.first_match(query_filters(q))
            details.append((found or Record.zero()).model_dump())
        return details

    @app.post("/q", response_model=List[Record])
    async def query_json(request: Request, db: RecordStore = Depends(get_store)):
        body = await request.body()
        try:
            # a JSON null decodes to no queries
            queries = QueryList.validate_json(body) or []
        except ValidationError as exc:
            logger.info("Rejected /q body: %s", exc.errors()[:1])
            return JSONResponse(
                status_code=400,
                content=ErrorMessage(message=QUERY_PARSE_ERROR).model_dump(),
            )

        # store calls take a lock; keep them off the event loop
        return await run_in_threadpool(_lookup, db, queries)

    # StaticFiles checks the directory at mount time
    os.makedirs(settings.photos_dir, exist_ok=True)
    app.mount("/imgs", StaticFiles(directory=settings.photos_dir), name="imgs")

    return app


def create_default_app() -> FastAPI:
    """
    App built from load_settings(), for
    `uvicorn gallery.api.api_main:create_default_app --factory`.
    """
    return create_app(load_settings())
