from venus.web.routers.auth import router as auth_router
from venus.web.routers.savings import router as savings_router

__all__ = [
    "auth_router",
    "savings_router",
]
