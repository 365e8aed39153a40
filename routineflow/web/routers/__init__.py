"""Router exports."""

# 日本語: 各機能ルーターを集約して application.py から一括 import 可能にする / English: Re-export feature routers for centralized app wiring
from .alarms_router import router as alarms_router
from .analytics_router import router as analytics_router
from .logs_router import router as logs_router
from .routines_router import router as routines_router
from .widget_router import router as widget_router

__all__ = [
    "routines_router",
    "logs_router",
    "analytics_router",
    "alarms_router",
    "widget_router",
]
