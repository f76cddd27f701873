from .graphs import router as graphs_router
from .settings import router as settings_router
from .snapshots import router as snapshots_router

__all__ = ["graphs_router", "settings_router", "snapshots_router"]
