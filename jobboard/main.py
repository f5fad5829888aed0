# ========================================
# jobboard/main.py - application factory and error mapping
# ========================================

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.database import connect_to_mongo, close_mongo_connection, get_db
from jobboard.errors import AppError, Unexpected

# ===========================
# IMPORT ALL ROUTERS
# ===========================
from jobboard.routes.user import router as user_router
from jobboard.routes.job import router as job_router
from jobboard.routes.application import router as application_router

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")
VERSION = "1.0.0"

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="Job Board API",
    description="Job postings and applications for employers and employees",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ===========================
# CORS MIDDLEWARE
# ===========================
raw_origins = os.getenv("ALLOWED_ORIGINS", "")
origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# DATABASE EVENTS
# ===========================

@app.on_event("startup")
async def start_db():
    """Connect to MongoDB on startup"""
    await connect_to_mongo()


@app.on_event("shutdown")
async def stop_db():
    """Close MongoDB connection on shutdown"""
    await close_mongo_connection()

# ===========================
# ERROR HANDLERS
# ===========================

def _field_name(loc) -> str:
    # loc looks like ("body", "company") or ("query", "page")
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": _field_name(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Resource not found" if exc.status_code == 404 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = Unexpected()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = Unexpected()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(user_router, prefix=API_PREFIX)
app.include_router(job_router, prefix=API_PREFIX)
app.include_router(application_router, prefix=API_PREFIX)

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/")
async def root():
    """API root endpoint with endpoint summary"""
    return {
        "status": "Job Board API running",
        "version": VERSION,
        "documentation": "/docs",
        "endpoints": {
            "users": [f"{API_PREFIX}/users/register", f"{API_PREFIX}/users/login", f"{API_PREFIX}/users/profile"],
            "jobs": [f"{API_PREFIX}/jobs", f"{API_PREFIX}/jobs/{{id}}", f"{API_PREFIX}/jobs/employer/jobs"],
            "applications": [
                f"{API_PREFIX}/applications",
                f"{API_PREFIX}/applications/job/{{jobId}}",
                f"{API_PREFIX}/applications/{{id}}",
            ],
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    db = get_db()
    if db is None:
        return JSONResponse(status_code=503, content={"status": "unavailable", "database": "disconnected"})

    try:
        await db.command("ping")
    except PyMongoError:
        logger.exception("Health check ping failed")
        return JSONResponse(status_code=503, content={"status": "unavailable", "database": "unreachable"})

    return {"status": "healthy", "database": "connected", "version": VERSION}


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "jobboard.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
