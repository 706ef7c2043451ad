# app/main.py
from contextlib import asynccontextmanager
import logging
import sys
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import settings
from app.core.errors import ServiceError, StorageFailure, ValidationFailed
from app.database.mongo_assignment import MongoAssignmentRepository
from app.database.mongo_user import MongoUserRepository
from app.routers.v1 import health
from app.routers.v1 import auth
from app.routers.v1 import assignment

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    stream=sys.stdout,
)

logger = logging.getLogger("assignment.app")


async def service_error_handler(request: Request, exc: ServiceError):
    body = {"message": exc.message}
    if isinstance(exc, ValidationFailed):
        body["errors"] = exc.errors
    if isinstance(exc, StorageFailure):
        # il dettaglio è già nei log del repository, al client niente interni
        logger.error("Storage failure su %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in e.get("loc", ())[1:]) or "body", "message": e.get("msg", "")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"message": "Validation failed", "errors": errors}),
    )


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = AsyncIOMotorClient(settings.mongo_uri, uuidRepresentation="standard", tz_aware=True)
        db = client[settings.mongo_db_name]

        repo = MongoAssignmentRepository(db)
        await repo.ensure_indexes()
        users = MongoUserRepository(db)
        await users.ensure_indexes()

        app.state.mongo_client = client
        app.state.assignment_repo = repo   # repo disponibili alle routes
        app.state.user_repo = users
        logger.info("Connesso a Mongo, database %s", settings.mongo_db_name)

        try:
            yield
        finally:
            client.close()

    app = FastAPI(
        title="Assignment Service",
        description="Servizio per la gestione degli assignment tra teacher e studenti",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health.router,     prefix="/api/v1", tags=["health"])
    app.include_router(auth.router,       prefix="/api/v1", tags=["auth"])
    app.include_router(assignment.router, prefix="/api/v1", tags=["assignments"])
    return app

app = create_app()
