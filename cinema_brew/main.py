from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cinema_brew.config import config
from cinema_brew.db import init_db
from cinema_brew.errors import FormatError, QuotaError
from cinema_brew.logger import get_logger
from cinema_brew.features.production.router import router as production_router
from cinema_brew.features.auth.router import router as auth_router
from cinema_brew.features.projects.router import router as projects_router
from cinema_brew.features.export.router import router as export_router

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    log.info("Database ready")
    yield


app = FastAPI(title="Cinema Brew API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials="*" not in config.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],  # for PDF downloads
)

app.include_router(production_router)
app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(export_router)


# The client shows `error` from any failed response
@app.exception_handler(QuotaError)
async def quota_error_handler(request: Request, exc: QuotaError):
    return JSONResponse(status_code=429, content={"error": exc.message})

@app.exception_handler(FormatError)
async def format_error_handler(request: Request, exc: FormatError):
    return JSONResponse(status_code=502, content={"error": exc.message})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = (exc.errors() or [{}])[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "Invalid request")
    message = f"{field}: {msg}" if field else msg
    return JSONResponse(status_code=422, content={"error": message})


@app.get("/api/v1/health")
async def health():
    return {"ok": True}
