"""FastAPI application backing the FileFinder web UI."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from filefinder.config import AppConfig
from filefinder.index.indexer import Indexer
from filefinder.index.search import SearchFilter, Searcher
from filefinder.index.stats import collect_stats
from filefinder.index.storage import SQLiteRecordStore, StoreError
from filefinder.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="FileFinder Web", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)
app.state.db_path = None


class SearchPayload(BaseModel):
    query: str
    all: bool = False
    ext: List[str] | str | None = None
    limit: int | None = None
    case_sensitive: bool = False
    min_size: int = 0
    max_size: int | None = None
    db: Path | None = None


class IndexPayload(BaseModel):
    path: str
    db: Path | None = None


def _resolve_db_path(db: Path | None) -> Path:
    if db is None:
        db = app.state.db_path
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    return config.resolve_db_path(Path.cwd())


def _ensure_db_parent(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _require_db(db: Path | None) -> Path:
    resolved_db = _resolve_db_path(db)
    if not resolved_db.exists():
        raise HTTPException(
            status_code=404,
            detail=f"Database not found at {resolved_db}. Index a directory first.",
        )
    return resolved_db


def _split_extensions(ext: List[str] | str | None) -> frozenset[str]:
    if ext is None:
        return frozenset()
    if isinstance(ext, str):
        ext = ext.split(",")
    return frozenset(item.strip() for item in ext if item.strip())


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/api/search")
async def search_files(payload: SearchPayload) -> dict[str, Any]:
    if not payload.query.strip():
        raise HTTPException(status_code=400, detail="Empty query")

    config = AppConfig()
    resolved_db = _require_db(payload.db)
    search_filter = SearchFilter(
        query=payload.query,
        search_content=payload.all,
        case_sensitive=payload.case_sensitive,
        extensions=_split_extensions(payload.ext),
        min_size=payload.min_size,
        max_size=payload.max_size,
        limit=config.clamp_limit(payload.limit),
    )

    try:
        with SQLiteRecordStore(resolved_db) as store:
            results = Searcher(store).search(search_filter)
    except StoreError as exc:
        LOGGER.error("Search failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {"results": [asdict(result) for result in results]}


@app.get("/api/stats")
async def database_stats(db: Path | None = None) -> dict[str, Any]:
    resolved_db = _require_db(db)
    try:
        with SQLiteRecordStore(resolved_db) as store:
            summary = collect_stats(store)
    except StoreError as exc:
        LOGGER.error("Stats failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return asdict(summary)


def _run_index_job(root: Path, resolved_db: Path) -> dict[str, Any]:
    config = AppConfig(db_path=resolved_db)
    with SQLiteRecordStore(resolved_db) as store:
        stats = Indexer(store, progress_every=config.progress_every).index(root)
    return {"indexed": stats.indexed, "failed": stats.failed, "root": str(stats.root)}


@app.post("/api/index")
async def index_directory(payload: IndexPayload) -> dict[str, Any]:
    clean_path = payload.path.strip().replace("\r", "").replace("\n", "")
    if not clean_path:
        raise HTTPException(status_code=400, detail="No path provided")
    if "\0" in clean_path:
        raise HTTPException(status_code=400, detail="Invalid path: contains null byte")

    root = Path(os.path.realpath(os.path.expanduser(clean_path)))
    if not root.exists():
        raise HTTPException(status_code=404, detail="Path not found: %s" % clean_path)
    if not root.is_dir():
        raise HTTPException(status_code=400, detail="Path must be a directory: %s" % clean_path)

    resolved_db = _resolve_db_path(payload.db)
    _ensure_db_parent(resolved_db)

    try:
        stats = await asyncio.to_thread(_run_index_job, root, resolved_db)
    except StoreError as exc:
        LOGGER.exception("Indexing failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {"status": "ok", "db": str(resolved_db), **stats}


@app.post("/api/vacuum")
async def vacuum_database(db: Path | None = None) -> dict[str, str]:
    resolved_db = _require_db(db)
    try:
        with SQLiteRecordStore(resolved_db) as store:
            store.vacuum()
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"status": "ok"}


@app.delete("/api/records")
async def clear_records(db: Path | None = None) -> dict[str, Any]:
    resolved_db = _require_db(db)
    try:
        with SQLiteRecordStore(resolved_db) as store:
            removed = store.clear()
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"status": "ok", "removed_count": removed}
