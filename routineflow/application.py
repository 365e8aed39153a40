"""FastAPI application assembly."""

from __future__ import annotations

import os

from fastapi import FastAPI

from routineflow.core.config import PROXY_PREFIX
from routineflow.core.db import _init_db
from routineflow.web.routers import (
    alarms_router,
    analytics_router,
    logs_router,
    routines_router,
    widget_router,
)


def create_app() -> FastAPI:
    # 日本語: 逆プロキシ配下運用を想定して root_path を環境変数から解決 / English: Resolve root_path from env for reverse-proxy deployments
    proxy_prefix = os.getenv("PROXY_PREFIX", PROXY_PREFIX)

    app = FastAPI(title="RoutineFlow", root_path=proxy_prefix)

    # 日本語: 機能別ルーターを順次登録 / English: Register feature routers
    app.include_router(routines_router)
    app.include_router(logs_router)
    app.include_router(analytics_router)
    app.include_router(alarms_router)
    app.include_router(widget_router)

    @app.on_event("startup")
    def _startup_init_db() -> None:
        # 日本語: 起動時にスキーマ適用を保証 / English: Ensure the schema is applied on startup
        _init_db()

    return app


# 日本語: import 時点で既定アプリを構築 / English: Build default app instance at import time
app = create_app()
