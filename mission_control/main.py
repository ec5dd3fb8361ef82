"""Main FastAPI application for the Mission Control task tracker."""
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mission_control import __version__
from mission_control.config import get_jwt_secret, JWT_SECRET
from mission_control.db.init import init_db
from mission_control.errors import AppError, Unauthorized
from mission_control.middleware.cors import add_cors_middleware
from mission_control.utils.logger import get_logger

logger = get_logger("mission_control.api")

# Create FastAPI application
app = FastAPI(
    title="Mission Control API",
    description="Task tracking with user roles, notes and a category/type/item taxonomy",
    version=__version__,
)

# Add CORS middleware
add_cors_middleware(app)


@app.on_event("startup")
def startup_event():
    """Check configuration and create database tables on startup."""
    get_jwt_secret()
    if not JWT_SECRET:
        logger.warning("JWT_SECRET not set, using the development signing secret")
    init_db()
    logger.info("Application startup complete", version=__version__)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies and parameters as invalid input (400)."""
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid input", "errors": jsonable_encoder(exc.errors())},
    )


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
def root():
    """Root endpoint - API welcome message."""
    return {
        "title": "Mission Control API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


# Import and include routers
from mission_control.routers import (  # noqa: E402
    admin_router,
    auth_router,
    dashboard_router,
    tasks_router,
    taxonomy_router,
    users_router,
)

app.include_router(auth_router, prefix="/api/auth")  # /api/auth/register, /login, /me
app.include_router(tasks_router, prefix="/api")  # /api/tasks
app.include_router(taxonomy_router, prefix="/api/taxonomy")  # /api/taxonomy/categories, /types, /items
app.include_router(users_router, prefix="/api")  # /api/users
app.include_router(dashboard_router, prefix="/api")  # /api/dashboard
app.include_router(admin_router, prefix="/api/admin")  # /api/admin/users


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "mission_control.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
    )
