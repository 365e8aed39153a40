"""Core configuration for RoutineFlow."""

from __future__ import annotations

import os
from pathlib import Path

from dateutil import tz
from dotenv import load_dotenv

# 日本語: ルート直下の secrets.env を起動時に読み込む / English: Load root-level secrets.env on startup
load_dotenv("secrets.env")

# 日本語: プロジェクトルート基準パス / English: Project root directory
BASE_DIR = Path(__file__).resolve().parents[2]

# 日本語: 接続先の既定値はローカル SQLite / English: Default connection URL is a local SQLite file
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./routineflow.db")

# 日本語: 逆プロキシ配下向けプレフィックス / English: Prefix for reverse-proxy deployments
PROXY_PREFIX = os.getenv("PROXY_PREFIX", "")

# 日本語: 「1日」の境界を決めるローカルタイムゾーン / English: Local zone that defines day boundaries
LOCAL_TIMEZONE = os.getenv("ROUTINEFLOW_TIMEZONE", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# 日本語: 集計ロジックの固定パラメータ / English: Fixed analytics parameters
STREAK_WINDOW_DAYS = 365
ACTIVE_DAY_THRESHOLD = 0.5
WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30
MAX_INSIGHTS = 4

# 日本語: OS 通知 ID の共通プレフィックス / English: Shared prefix of managed OS trigger ids
ALARM_TRIGGER_PREFIX = "routine_"


def get_local_timezone():
    """Resolve the configured local zone, falling back to the host zone."""
    name = os.getenv("ROUTINEFLOW_TIMEZONE", LOCAL_TIMEZONE).strip()
    if name:
        zone = tz.gettz(name)
        if zone is not None:
            return zone
    return tz.tzlocal()


def get_upcoming_alarm_limit() -> int:
    """Maximum alarms listed by the widget upcoming view."""
    # 日本語: 過大値や不正値を防ぐため 1〜20 にクランプ / English: Clamp to 1-20 to avoid unsafe values
    raw_value = os.getenv("ROUTINEFLOW_UPCOMING_ALARM_LIMIT", "5")
    try:
        parsed = int(raw_value)
    except (TypeError, ValueError):
        parsed = 5
    return max(1, min(parsed, 20))
