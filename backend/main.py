"""Restaurant directory — FastAPI backend."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from utils.config import CORS_ORIGINS, LOG_LEVEL, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

from api.routes import router
from api.venues import router as venues_router
from db import create_client, ensure_indexes, venue_collection
from utils.errors import VenueNotFoundError, VenueValidationError

LOG = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _not_found(request: Request, exc: VenueNotFoundError) -> JSONResponse:
    LOG.info("%s %s: restaurant %s not found", request.method, request.url.path, exc.venue_id)
    return _error(status.HTTP_404_NOT_FOUND, "Restaurant not found")


async def _invalid_filter(request: Request, exc: VenueValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, message)


async def _store_failure(request: Request, exc: PyMongoError) -> JSONResponse:
    LOG.error("%s %s failed against MongoDB", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    LOG.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def create_app(mongo_client: Optional[MongoClient] = None) -> FastAPI:
    """
    Build the application. The app owns one Mongo client for its lifetime; pass mongo_client
    to inject one (tests), otherwise it is created from MONGO_URL at startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = mongo_client if mongo_client is not None else create_client()
        app.state.venues = venue_collection(client)
        ensure_indexes(app.state.venues)
        try:
            yield
        finally:
            if mongo_client is None:
                client.close()

    app = FastAPI(
        title="Restaurant Directory",
        description="Restaurants with contact details, ratings and comments, backed by MongoDB",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(VenueNotFoundError, _not_found)
    app.add_exception_handler(VenueValidationError, _invalid_filter)
    app.add_exception_handler(RequestValidationError, _invalid_body)
    app.add_exception_handler(PyMongoError, _store_failure)
    app.add_exception_handler(BSONError, _unexpected)
    app.add_exception_handler(Exception, _unexpected)

    app.include_router(router)
    app.include_router(venues_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
