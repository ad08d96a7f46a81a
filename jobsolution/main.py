import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from jobsolution.config.config import settings
from jobsolution.config.database import engine
from jobsolution.config.errors import ErrorMessages
from jobsolution.db.migration_db import run_migrations
from jobsolution.middleware.rate_limit import RateLimitMiddleware
from jobsolution.models import all_models  # noqa: F401
from jobsolution.routers.api_router import api_router

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS:
        run_migrations(engine, settings.MIGRATIONS_DIR)
    logger.info(f"JobSolution API started in {settings.SERVER_MODE} mode")
    yield


app = FastAPI(title="JobSolution API", lifespan=lifespan)

app.add_middleware(
    RateLimitMiddleware,
    requests=settings.RATE_LIMIT_REQUESTS,
    period=settings.RATE_LIMIT_DURATION_SECONDS,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# Malformed input is a 400 across the API, not FastAPI's default 422
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": ErrorMessages.INTERNAL_ERROR})


# Both prefixes serve the same routes
app.include_router(api_router, prefix="/api")
app.include_router(api_router, prefix="/api/v1", include_in_schema=False)


@app.get("/health")
def health():
    return {"status": "ok"}


def run():
    import uvicorn

    uvicorn.run("jobsolution.main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT, reload=not settings.is_release)


if __name__ == "__main__":
    run()
