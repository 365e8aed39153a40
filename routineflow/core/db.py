"""Database engine, schema migration and session helpers."""

from __future__ import annotations

import logging
import os
import threading
from typing import Iterator

from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from routineflow.core.config import BASE_DIR, DATABASE_URL

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./routineflow.db"


def _normalize_database_url(database_url: str) -> str:
    # 日本語: 旧 postgres:// を SQLAlchemy 推奨形式へ正規化 / English: Normalize legacy postgres:// URL to SQLAlchemy-friendly form
    normalized_url = (database_url or "").strip()
    if normalized_url.startswith("postgres://"):
        normalized_url = normalized_url.replace("postgres://", "postgresql+psycopg2://", 1)
    if not normalized_url.startswith(("postgresql", "sqlite")):
        raise ValueError("DATABASE_URL must be PostgreSQL or SQLite (postgresql+psycopg2://... or sqlite:///...).")
    return normalized_url


def _is_memory_url(database_url: str) -> bool:
    return database_url.startswith("sqlite") and (":memory:" in database_url or database_url.rstrip("/") == "sqlite:")


def _build_engine(database_url: str):
    # 日本語: URL検証後にエンジン生成 / English: Build engine after URL validation
    normalized_url = _normalize_database_url(database_url)
    if normalized_url.startswith("sqlite"):
        # 日本語: SQLite はスレッド間共有を許可、メモリDBは単一接続 / English: Allow cross-thread SQLite use; pin in-memory DBs to one connection
        kwargs = {"connect_args": {"check_same_thread": False}}
        if _is_memory_url(normalized_url):
            kwargs["poolclass"] = StaticPool
        return create_engine(normalized_url, **kwargs)
    return create_engine(normalized_url)


def _database_url_from_env() -> str:
    # 日本語: 実行時環境変数を優先 / English: Prefer runtime environment override
    return os.getenv("DATABASE_URL", DATABASE_URL or DEFAULT_DATABASE_URL)


def upgrade_to_head(database_url: str) -> None:
    """Apply Alembic migrations to the latest revision."""
    try:
        from alembic import command
        from alembic.config import Config
    except ModuleNotFoundError as exc:  # pragma: no cover - dependency error path
        raise RuntimeError("Alembic is required. Install dependencies and retry.") from exc

    config = Config(str(BASE_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(BASE_DIR / "migrations"))
    config.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(config, "head")


# 日本語: モジュール初期化時点の接続情報とエンジン / English: Module-level current URL and engine
_current_database_url = _normalize_database_url(_database_url_from_env())
engine = _build_engine(_current_database_url)
_db_initialized = False
_db_init_lock = threading.Lock()


def refresh_engine_from_env() -> None:
    """Refresh engine if DATABASE_URL changed after initial module import."""
    global engine, _db_initialized, _current_database_url

    # 日本語: 環境差し替え時のみエンジンを再構築 / English: Rebuild engine only when URL actually changes
    latest_database_url = _normalize_database_url(_database_url_from_env())
    if latest_database_url == _current_database_url:
        return

    engine = _build_engine(latest_database_url)
    _current_database_url = latest_database_url
    _db_initialized = False


def _ensure_db_initialized() -> None:
    global _db_initialized
    if _db_initialized:
        return
    # 日本語: スキーマ適用はプロセス内で一度だけ実行 / English: Apply schema once per process with lock protection
    with _db_init_lock:
        if _db_initialized:
            return
        if _is_memory_url(_current_database_url):
            # 日本語: メモリDBは Alembic の別接続から見えないため直接作成 / English: In-memory DBs are invisible to Alembic's own connection, so create tables directly
            from routineflow import models as _models  # noqa: F401

            SQLModel.metadata.create_all(engine)
        else:
            upgrade_to_head(_current_database_url)
        logger.info("Database schema ready at %s", _current_database_url.split("@")[-1])
        _db_initialized = True


def _init_db() -> None:
    _ensure_db_initialized()


def create_session() -> Session:
    # 日本語: 明示的セッション生成（スクリプト等で利用） / English: Explicit session factory (used by scripts, etc.)
    _ensure_db_initialized()
    return Session(engine)


def get_db() -> Iterator[Session]:
    # 日本語: FastAPI Depends 用のセッション供給器 / English: Dependency provider for FastAPI routes
    _ensure_db_initialized()
    with Session(engine) as db:
        yield db
