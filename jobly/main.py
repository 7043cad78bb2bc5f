import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobly import config
from jobly.accounts import routes as accounts
from jobly.accounts.db import seed_admin
from jobly.companies import routes as companies
from jobly.db import init_db, make_engine
from jobly.errors import BadRequestError, JoblyError
from jobly.filters import error_messages
from jobly.jobs import routes as jobs

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)
    seed_admin(app.state.engine)
    logger.info("Database ready at %s", app.state.engine.url.render_as_string(hide_password=True))
    yield


async def jobly_error(request: Request, exc: JoblyError):
    logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status, exc.message)
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


async def validation_error(request: Request, exc: RequestValidationError):
    return await jobly_error(request, BadRequestError(error_messages(exc.errors())))


async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"message": exc.detail, "status": exc.status_code}},
    )


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    _configure_logging()
    app = FastAPI(title="Jobly", lifespan=lifespan)
    app.state.engine = engine if engine is not None else make_engine()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(JoblyError, jobly_error)
    app.add_exception_handler(RequestValidationError, validation_error)
    app.add_exception_handler(StarletteHTTPException, http_error)

    app.include_router(accounts.router)
    app.include_router(companies.router)
    app.include_router(jobs.router)

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
