import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quizbook.api import deps
from quizbook.api import router as api_router
from quizbook.catalog import QuizCatalog
from quizbook.config import settings
from quizbook.exceptions import InputShapeError

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    catalog = QuizCatalog(settings.quiz_dir)
    await catalog.startup()
    deps.catalog = catalog
    yield
    deps.catalog = None


app = FastAPI(lifespan=lifespan)
app.include_router(api_router, prefix="/api")


@app.exception_handler(InputShapeError)
async def input_shape_error_handler(_: Request, exc: InputShapeError) -> JSONResponse:
    logger.warning("rejected submission: %s", exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


PROD_ORIGINS: list[str] = []
DEV_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0|\[::1\])(:\d+)?$"
app.add_middleware(
    CORSMiddleware,
    allow_origins=PROD_ORIGINS,
    allow_origin_regex=DEV_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)
