"""
Main FastAPI application entry point.

Run with:
    uvicorn txgroups.main:app
or:
    python -m txgroups.main
"""

from txgroups.application import create_app
from txgroups.config import get_settings
from txgroups.core.logging import intercept_standard_logging

# Intercept logs from uvicorn, pymongo and other libraries
intercept_standard_logging()

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "txgroups.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if settings.debug else "warning",
    )
