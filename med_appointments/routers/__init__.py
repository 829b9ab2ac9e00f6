# Routers package
from . import appointments_router
from . import static_router

__all__ = [
    "appointments_router",
    "static_router",
]
