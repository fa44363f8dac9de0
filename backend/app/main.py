import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.routes import tasks, dashboard, teams, users, auth
from app.core.config import (
    CORS_ORIGINS,
    CORS_ORIGIN_REGEX,
    DATA_DIR,
    LOG_LEVEL,
    STORAGE_BACKEND,
    parse_cors_origins,
)
from app.core.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger("uvicorn.error")
logger.setLevel(LOG_LEVEL)

app = FastAPI(title="Task Management API")

cors_origins = parse_cors_origins(CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info("%s %s -> %s (%s)", request.method, request.url.path, exc.message, exc.identifier)
    return JSONResponse(status_code=404, content={"detail": exc.message})


app.include_router(tasks.router)
app.include_router(dashboard.router)
app.include_router(teams.router)
app.include_router(users.router)
app.include_router(auth.router)

@app.get("/")
def root():
    return {"message": "API is running"}


@app.get("/health")
def healthcheck():
    return {"status": "ok"}


@app.on_event("startup")
def startup_event():
    logger.info("Task API starting (storage=%s, data_dir=%s)", STORAGE_BACKEND, DATA_DIR)
