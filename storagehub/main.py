# storagehub/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storagehub.core.config import get_settings
from storagehub.core.errors import StorageHubError
from storagehub.core.logging import setup_logging
from storagehub.models.database import Base, engine
from storagehub.models import file, folder  # noqa: F401  (register tables)
from storagehub.routers import files, upload

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings().log_level)
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(lifespan=lifespan)

# include our routers
app.include_router(upload.router)
app.include_router(files.router)


@app.exception_handler(StorageHubError)
async def storagehub_error_handler(request: Request, exc: StorageHubError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s %s", request.method, request.url.path, exc.message, exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [str(err["loc"][-1]) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request: " + ", ".join(fields),
            "code": "ValidationError",
            "details": {"fields": fields},
        },
    )
