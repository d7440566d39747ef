# kitchen/app/main.py
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kitchen.app.config import get_config
from kitchen.app.deps import get_context
from kitchen.app.domain.errors import AuthenticationError, ConfigurationError
from kitchen.app.routers.admin import router as admin_router
from kitchen.app.routers.generate import router as generate_router
from kitchen.app.routers.kitchen import router as kitchen_router
from kitchen.app.routers.settings import router as settings_router

# Plain stdout logging, fine for dev and containers
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Sam Kitchen API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Server-side proxies
app.include_router(generate_router)
app.include_router(settings_router)

# Page and admin panel
app.include_router(kitchen_router)
app.include_router(admin_router)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"message": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Server configuration error on %s: %s", request.url.path, exc.details)
    content = {"details": exc.details}
    if exc.error:
        content["error"] = exc.error
    return JSONResponse(status_code=500, content=content)


@app.on_event("startup")
def startup() -> None:
    # Never raises; falls back to cached or built-in settings.
    get_context().load()


@app.get("/health")
def health():
    return {"ok": True}
