# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.db import init_db, close_db
from app.core.errors import AppError, InternalError, ValidationError
from app.core.security import TokenService

from app.api.routers import users, profile, post

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# Signing secret is loaded once and handed to the token service
app.state.tokens = TokenService(settings.jwt_secret)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    # Known outcomes: one descriptive key per condition
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Unparseable bodies never reach the handlers' own validation
    err = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body"
    error = ValidationError(f"{field}: {err.get('msg', 'invalid request')}")
    return JSONResponse(status_code=error.status_code, content=error.to_body())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("[error] %s %s failed", request.method, request.url.path)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_body())


@app.on_event("startup")
async def on_startup():
    if settings.jwt_secret == "dev-secret" and settings.env != "dev":
        logger.warning("[startup] JWT_SECRET is not set; using the development secret")
    await init_db()


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(users.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(post.router, prefix="/api")


@app.get("/")
def index():
    return {"Hello": "World"}


@app.get("/healthz")
def healthz():
    return {"ok": True}
