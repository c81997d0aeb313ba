from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import FastAPI
from sqlalchemy import text

from helpcenter.api.routers.articles import router as articles_router
from helpcenter.api.routers.projects import router as projects_router
from helpcenter.api.routers.steps import router as steps_router
from helpcenter.api.routers.tutorials import router as tutorials_router
from helpcenter.core.config import settings
from helpcenter.core.db import engine
from helpcenter.core.errors import register_error_handlers
from helpcenter.core.logging import configure_logging
from helpcenter.models import Base

configure_logging(settings.LOG_LEVEL)
log = logging.getLogger("helpcenter")

OPENAPI_TAGS = [
    {"name": "Project", "description": "Projects supported by system"},
    {"name": "Tutorial", "description": "Tutorials available for a project"},
    {"name": "Step", "description": "Tutorial Step"},
    {"name": "Article", "description": "Project Article describing any specific feature"},
]

app = FastAPI(
    title="Help Center",
    version="1.0.0",
    description="Projects with their tutorials (made of ordered steps) and articles.",
    contact={"email": settings.DOCS_CONTACT_EMAIL},
    license_info={"name": "Apache 2.0", "url": "http://www.apache.org/licenses/LICENSE-2.0.html"},
    openapi_tags=OPENAPI_TAGS,
)
register_error_handlers(app)


def _retry_backoff(fn, *, attempts: int = 30, base_sleep_s: float = 1.0, max_sleep_s: float = 2.0, what: str) -> bool:
    sleep_s = base_sleep_s
    for i in range(1, attempts + 1):
        try:
            fn()
            return True
        except Exception as e:
            if i == attempts:
                log.error("Startup: %s still not ready after %s attempts: %s", what, attempts, str(e))
                return False
            log.warning("Startup: %s not ready (attempt %s/%s): %s", what, i, attempts, str(e))
            time.sleep(sleep_s)
            sleep_s = min(max_sleep_s, sleep_s * 2.0)
    return False


def _ping_database() -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def _check_database() -> bool:
    try:
        _ping_database()
        return True
    except Exception:
        return False


@app.on_event("startup")
def _startup() -> None:
    # Do not crash API if the database is temporarily unavailable.
    if settings.WAIT_FOR_DB_ON_STARTUP:
        _retry_backoff(_ping_database, what="database")
    else:
        log.info("Startup: WAIT_FOR_DB_ON_STARTUP=false; skipping database readiness check")

    if settings.CREATE_SCHEMA_ON_STARTUP:
        Base.metadata.create_all(bind=engine)
        log.info("Startup: schema created (CREATE_SCHEMA_ON_STARTUP=true)")


@app.get("/health", include_in_schema=False)
def health() -> dict[str, Any]:
    deps = {"database": _check_database()}
    return {"ok": all(deps.values()), "deps": deps, "app": settings.APP_NAME}


app.include_router(projects_router)
app.include_router(tutorials_router)
app.include_router(steps_router)
app.include_router(articles_router)
