from .courses import router as courses_router
from .editor import router as editor_router

__all__ = ["courses_router", "editor_router"]
