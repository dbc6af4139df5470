# /app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .core.config import get_settings
from .core.errors import AuthenticationError, LibraryError, TransactionError
from .core.logging_config import setup_logging
from .db.database import init_db
from .routers import books_router, borrow_router, users_router

logger = logging.getLogger(__name__)

settings = get_settings()


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    setup_logging(settings)
    init_db()
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title=settings.app_name,
    description="Book catalog with transactional borrowing and returns.",
    version=settings.app_version,
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error Handling ---
@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    if isinstance(exc, TransactionError):
        logger.error("%s %s failed: %r", request.method, request.url.path, exc.__cause__)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed request bodies are client errors like any other bad input.
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": "Invalid request body"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": "Server error"})


# --- API Router Inclusion ---
app.include_router(books_router.router, prefix="/api/books", tags=["Books"])
app.include_router(borrow_router.router, prefix="/api", tags=["Borrowing"])
app.include_router(users_router.router, prefix="/api/users", tags=["Users"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"message": "Welcome to the Library Management System API", "version": app.version}
