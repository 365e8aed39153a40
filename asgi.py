import logging

from routineflow.core.config import LOG_LEVEL
from routineflow.asgi import app

# Setup logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("routineflow_asgi")
logger.info("RoutineFlow ASGI app loaded")

__all__ = ["app"]
