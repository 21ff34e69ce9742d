from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.exceptions import AppError
from app.db.init_db import create_all_tables
from app.deps import get_current_user, resolve_session
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.session_gate import SessionGateMiddleware
from app.modules.auth.api.router import router as auth_router
from app.modules.user_management.api.router import router as user_router
from app.modules.user_management.models.user import User
from app.modules.follows.api.router import router as follows_router
from app.modules.home_feed.api.router import router as home_feed_router
from app.modules.posts.api.router import router as posts_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    if not create_all_tables():
        logger.error("Database tables could not be created; requests touching the store will fail")
    yield
    logger.info("Shutting down")

# Initialize the FastAPI application.
# SessionGateMiddleware turns away requests without a valid session on every path
# outside the allow-list; resolve_session then loads the caller for each route.
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    debug=settings.DEBUG,
    description="Posts, replies, likes and follows with cookie-based sessions",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    dependencies=[Depends(resolve_session)],
    lifespan=lifespan,
)

# ---- Exception handlers: every error body carries a "message" ----
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message} {exc.context}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    ctx_error = first.get("ctx", {}).get("error")
    if ctx_error is not None:
        message = str(ctx_error)
    else:
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg', 'Invalid request')}" if field else first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "message": message,
            "errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors],
        },
    )

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "An unexpected error occurred."})

# Add middleware; the last one added sees the request first
app.add_middleware(SessionGateMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS; credentials are needed for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers.
# The feed router goes before the posts router so /posts/feed is not taken for a post id.
app.include_router(auth_router, prefix=f"{settings.API_PREFIX}/users", tags=["authentication"])
app.include_router(user_router, prefix=f"{settings.API_PREFIX}/users", tags=["users"])
app.include_router(follows_router, prefix=f"{settings.API_PREFIX}/users", tags=["follows"])
app.include_router(home_feed_router, prefix=f"{settings.API_PREFIX}/posts", tags=["home feed"])
app.include_router(posts_router, prefix=f"{settings.API_PREFIX}/posts", tags=["posts"])

@app.get("/")
async def root(current_user: User = Depends(get_current_user)):
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "user": current_user.username,
        "documentation": "/docs" if settings.DEBUG else None,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
