import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import schema, settings
from core.db import Database
from core.errors import StoreError, ValidationError
from pantries import router as pantries_router
from users import router as users_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, shared by every request.
    db = Database.from_env()
    await db.connect()
    try:
        await schema.initialize(db)
        if not await schema.pantries_table_exists(db):
            logger.warning("precondition_missing table=pantries pantry endpoints will fail until it exists")
        app.state.db = db
        yield
    finally:
        app.state.db = None
        await db.close()


app = FastAPI(
    title="Cooking App API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api-docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def handle_validation_error(_: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.error, "message": exc.message, "field": exc.field},
    )


def _field_from_loc(loc: tuple) -> str:
    parts = [part for part in loc if isinstance(part, str) and part not in ("body", "path", "query")]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = _field_from_loc(tuple(first.get("loc", ())))
    message = str(first.get("msg") or "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid input", "message": f"{field}: {message}", "field": field},
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    content = exc.detail if isinstance(exc.detail, dict) else {"detail": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(StoreError)
async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
    # Faults raised outside a controller (e.g. dependency setup).
    logger.error("store_error path=%s error=%s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": "An unexpected error occurred"},
    )


app.include_router(users_router.router, prefix=API_PREFIX, tags=["users"])
app.include_router(pantries_router.router, prefix=API_PREFIX, tags=["pantries"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "Welcome to the Cooking App API."}


def run() -> None:
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger.info("server_start port=%s docs=/api-docs", settings.port())
    uvicorn.run(app, host=settings.host(), port=settings.port())


if __name__ == "__main__":
    run()
