import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from salesdesk.api.router import api_router
from salesdesk.api.routes.health import healthcheck
from salesdesk.config import settings
from salesdesk.core.errors import (
    ServiceError,
    request_validation_error_handler,
    service_error_handler,
)
from salesdesk.core.observability import global_exception_handler, request_logging_middleware
from salesdesk.database import POOL_CONFIG

api_prefix = settings.api_prefix

logger = logging.getLogger("salesdesk")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info(
        "runtime_config",
        extra={"environment": settings.environment, "db_pool": POOL_CONFIG},
    )
    yield


app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    docs_url="/docs" if settings.enable_docs else None,
    redoc_url="/redoc" if settings.enable_docs else None,
    openapi_url=f"{api_prefix}/openapi.json" if settings.enable_docs else None,
)

# Middleware reads the logger from app state.
app.state.logger = logger

app.add_exception_handler(ServiceError, service_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.middleware("http")(request_logging_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=api_prefix)


@app.get("/", tags=["meta"])
def root():
    return {
        "message": settings.app_name,
        "docs": f"{api_prefix}/openapi.json" if settings.enable_docs else None,
    }


# Unprefixed aliases for load balancers and container probes.
app.add_api_route("/health", healthcheck, methods=["GET"], tags=["meta"])
app.add_api_route("/healthz", healthcheck, methods=["GET"], tags=["meta"])
