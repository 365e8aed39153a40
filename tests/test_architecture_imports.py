import re
from pathlib import Path


ROOT_DIR = Path(__file__).resolve().parents[1]
PACKAGE_DIR = ROOT_DIR / "routineflow"
ROUTERS_DIR = PACKAGE_DIR / "web" / "routers"
ENGINE_MODULES = [
    "calendar_service.py",
    "completion_index_service.py",
    "streak_service.py",
    "analytics_service.py",
    "alarm_service.py",
    "widget_service.py",
]


def test_routers_do_not_import_application_module():
    for router_file in ROUTERS_DIR.glob("*_router.py"):
        source = router_file.read_text(encoding="utf-8")
        assert re.search(r"^\s*from\s+routineflow\.application\s+import\b", source, flags=re.MULTILINE) is None
        assert re.search(r"^\s*import\s+routineflow\.application\b", source, flags=re.MULTILINE) is None


def test_engine_modules_do_not_touch_the_database():
    for name in ENGINE_MODULES:
        source = (PACKAGE_DIR / "services" / name).read_text(encoding="utf-8")
        assert "routineflow.core.db" not in source
        assert "Session" not in source


def test_asgi_entrypoint_exports_application_symbols():
    asgi_entrypoint = (PACKAGE_DIR / "asgi.py").read_text(encoding="utf-8")
    assert "from .application import app, create_app" in asgi_entrypoint
