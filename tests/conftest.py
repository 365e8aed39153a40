import itertools
import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ROUTINEFLOW_TIMEZONE", "UTC")

from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from routineflow.models import Routine, RoutineLog  # noqa: E402

_ids = itertools.count(1)


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture()
def make_routine():
    def _make(**overrides):
        index = next(_ids)
        fields = {
            "id": f"r{index}",
            "title": f"Routine {index}",
            "icon": "*",
            "color": "#000000",
            "category": "custom",
            "time_slot": "morning",
            "sort_order": index,
            "is_active": True,
        }
        fields.update(overrides)
        return Routine(**fields)

    return _make


@pytest.fixture()
def make_log():
    def _make(routine, date_key, **overrides):
        routine_id = routine if isinstance(routine, str) else routine.id
        return RoutineLog(routine_id=routine_id, date_key=date_key, **overrides)

    return _make
