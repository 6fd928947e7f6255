# apps/api/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.api.routers import admin, auth, records
from core.config import settings
from core.errors import PortalError, ValidationFailed
from core.logging import configure_logging
from services.persistence.mongo import ensure_indexes, get_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    if settings.STORE_BACKEND == "mongo":
        try:
            ensure_indexes(get_database())
        except PyMongoError:
            # requests will surface the outage as 500s; keep serving /healthz
            logger.exception("could not reach MongoDB at startup")
    logger.info("pension portal started (store=%s)", settings.STORE_BACKEND)
    yield


app = FastAPI(title="Pension Portal API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(_: Request, exc: PortalError) -> JSONResponse:
    body = {"message": exc.message}
    if isinstance(exc, ValidationFailed):
        body["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            # drop the leading "body"/"query" marker
            "field": ".".join(str(p) for p in err.get("loc", ())[1:]) or "body",
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Validation failed", "errors": errors})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(records.pension_router)
app.include_router(records.family_pension_router)
app.include_router(records.contact_router)
app.include_router(auth.router)
app.include_router(admin.router)
