from iconserver.routers import health, icons

__all__ = [
    "health",
    "icons",
]
