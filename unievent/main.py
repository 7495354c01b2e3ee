import logging
import os

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.requests import Request

from unievent.api.v1.router import api_router
from unievent.core.body_limit import BodySizeLimitMiddleware
from unievent.core.config import settings
from unievent.core.errors import AppError, Internal
from unievent.core.logging import setup_logging
from unievent.db.bootstrap import run_migrations_and_seed

setup_logging()
logger = logging.getLogger(__name__)

api = FastAPI(
    title="UniEvent - College Event Management API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

api.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.MAX_BODY_SIZE)
api.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# métricas /metrics (Prometheus)
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

api.include_router(api_router, prefix=settings.API_PREFIX)

# arquivos estáticos públicos (sem controle de acesso)
for _path, _directory in (("/uploads", settings.uploads_dir), ("/certificates", settings.certificates_dir)):
    os.makedirs(_directory, exist_ok=True)
    api.mount(_path, StaticFiles(directory=_directory), name=_path.strip("/"))

@api.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

@api.on_event("startup")
def startup():
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        run_migrations_and_seed()
    logger.info("UniEvent API ready (%s)", settings.ENVIRONMENT)

@api.exception_handler(AppError)
def handle_app_error(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

@api.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"code": "VALIDATION_ERROR", "message": "Invalid input.", "details": jsonable_encoder(exc.errors())},
    )

@api.exception_handler(IntegrityError)
def handle_integrity_error(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, getattr(exc, "orig", exc))
    return JSONResponse(
        status_code=409,
        content={"code": "UNIQUE_VIOLATION", "message": "Duplicate record.", "details": None},
    )

@api.exception_handler(SQLAlchemyError)
def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=Internal().to_dict(),
    )

@api.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    # nunca devolve SQL nem stack trace para o cliente
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=Internal().to_dict(),
    )


def run():
    import uvicorn

    uvicorn.run("unievent.main:api", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
