"""
FastAPI Main Application
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from hr_console.config import settings, log_configuration
from hr_console.database import init_db, SessionLocal
from hr_console.routers import (
    auth, pages, departments, employees, skills, trainings, training_plans, training_data, statistics
)
from hr_console.services.errors import (
    StoreError, RecordNotFoundError, DuplicateEmployeeCodeError, MonthNotPlannedError, InvalidValueError
)

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and default data on startup"""
    print(f"🚀 {settings.app_name} v{settings.app_version} starting")
    log_configuration()
    init_db()

    if settings.seed_default_data:
        from hr_console.models.init_data import init_default_data

        db = SessionLocal()
        try:
            init_default_data(db)
        finally:
            db.close()
    yield
    print(f"👋 {settings.app_name} stopped")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


STORE_ERROR_STATUS = {
    RecordNotFoundError: 404,
    DuplicateEmployeeCodeError: 409,
    MonthNotPlannedError: 400,
    InvalidValueError: 400,
}


# Exception handlers
@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    """Report data store failures with their message, details, hint and code"""
    status_code = STORE_ERROR_STATUS.get(type(exc), 500)
    if status_code == 500:
        logger.error(f"Unhandled store error on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Custom exception handler for HTTP exceptions
    Redirects to the sign-in screen for 401/403 errors on HTML requests
    """
    # Check if this is an HTML request (not an API call)
    accept_header = request.headers.get("accept", "")
    is_html_request = "text/html" in accept_header

    if exc.status_code in [401, 403] and is_html_request:
        return RedirectResponse(url="/auth", status_code=302)

    # For API requests or other status codes, return JSON response
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers
    )


# Include routers
# Web page routers (no prefix)
app.include_router(pages.router)

# Auth router (no /api prefix)
app.include_router(auth.router)

# API routers (with /api prefix)
app.include_router(departments.router, prefix="/api")
app.include_router(employees.router, prefix="/api")
app.include_router(skills.router, prefix="/api")
app.include_router(trainings.router, prefix="/api")
app.include_router(training_plans.router, prefix="/api")
app.include_router(training_data.router, prefix="/api")
app.include_router(statistics.router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.app_version}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=settings.debug)
