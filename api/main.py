"""
FastAPI main application for the Book Summaries API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.auth import get_caller_id
from api.config import config
from api.models import DeleteResponse, ErrorResponse, HealthResponse, SummaryResponse
from summaries.database import SummaryStore
from summaries.errors import SummaryError, Unauthenticated
from summaries.service import SummaryService
from utilities.logger import get_logger, setup_logging

# Setup logging
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file,
        debug=config.debug
    )
    logger.info("Starting Book Summaries API")

    store = SummaryStore(
        connection_url=config.mongodb_url,
        database_name=config.mongodb_database,
        collection_name=config.mongodb_collection
    )
    try:
        await store.connect()
        logger.info("Database connection established")
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        raise

    app.state.store = store
    app.state.summary_service = SummaryService(store)

    yield

    # Shutdown
    logger.info("Shutting down Book Summaries API")
    await store.disconnect()


def get_summary_service(request: Request) -> SummaryService:
    """Return the service built at startup."""
    service = getattr(request.app.state, "summary_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service not available"
        )
    return service


# Create FastAPI application
app = FastAPI(
    title=config.api_title,
    description="""
    A REST API for user-authored book summaries.

    ## Features

    * **Browsing**: List summaries newest first, optionally capped with `_limit`
    * **Authoring**: Create, update and delete your own summaries
    * **Tags**: Send tags as a list or as a comma-separated string

    ## Authentication

    Reading is public. Writing requires a bearer token in the Authorization header:

    ```
    Authorization: Bearer your_token_here
    ```

    Only the owner of a summary may update or delete it.
    """,
    version=config.api_version,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=config.cors_allow_credentials,
    allow_methods=config.cors_allow_methods,
    allow_headers=config.cors_allow_headers,
)


def _error_response(status_code: int, error: str, detail: Optional[str] = None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail, status_code=status_code).model_dump(),
        headers=headers
    )


# Exception handlers
@app.exception_handler(SummaryError)
async def summary_error_handler(request: Request, exc: SummaryError):
    """Map summary failures to their HTTP status."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return _error_response(exc.status_code, exc.message, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Handle unreadable request bodies."""
    return _error_response(status.HTTP_400_BAD_REQUEST, "Malformed request body")


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return _error_response(exc.status_code, exc.detail, headers=exc.headers)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        detail=str(exc) if config.debug else None
    )


def _to_content(summary) -> dict:
    return SummaryResponse.from_summary(summary).model_dump(mode="json", by_alias=True)


# Health check endpoint (no authentication required)
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint."""
    db_status = "unavailable"
    store = getattr(request.app.state, "store", None)
    if store is not None:
        health_info = await store.health_check()
        db_status = health_info.get("status", "unknown")

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=config.api_version,
        database_status=db_status
    )


# Summaries endpoints
@app.get("/api/summaries", response_model=List[SummaryResponse], tags=["Summaries"])
async def list_summaries(
    limit: Optional[str] = Query(None, alias="_limit"),
    service: SummaryService = Depends(get_summary_service)
):
    """
    Get all summaries, most recently created first.

    - **_limit**: Optional maximum number of summaries to return
    """
    summaries = await service.list_summaries(limit)
    return JSONResponse(content=[_to_content(summary) for summary in summaries])


@app.get("/api/summaries/{summary_id}", response_model=SummaryResponse, tags=["Summaries"])
async def get_summary(
    summary_id: str,
    service: SummaryService = Depends(get_summary_service)
):
    """
    Get a single summary by ID.

    - **summary_id**: Summary identifier (MongoDB ObjectId)
    """
    summary = await service.get_summary(summary_id)
    return JSONResponse(content=_to_content(summary))


@app.post(
    "/api/summaries",
    response_model=SummaryResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Summaries"]
)
async def create_summary(
    payload: Any = Body(None),
    caller_id: str = Depends(get_caller_id),
    service: SummaryService = Depends(get_summary_service)
):
    """
    Create a summary owned by the caller.

    - **title**, **author**, **body**: Required, non-blank
    - **tags**: Optional list of strings or comma-separated string
    """
    summary = await service.create_summary(caller_id, payload)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=_to_content(summary))


@app.put("/api/summaries/{summary_id}", response_model=SummaryResponse, tags=["Summaries"])
async def update_summary(
    summary_id: str,
    payload: Any = Body(None),
    caller_id: str = Depends(get_caller_id),
    service: SummaryService = Depends(get_summary_service)
):
    """Replace a summary owned by the caller."""
    summary = await service.update_summary(caller_id, summary_id, payload)
    return JSONResponse(content=_to_content(summary))


@app.delete("/api/summaries/{summary_id}", response_model=DeleteResponse, tags=["Summaries"])
async def delete_summary(
    summary_id: str,
    caller_id: str = Depends(get_caller_id),
    service: SummaryService = Depends(get_summary_service)
):
    """Delete a summary owned by the caller."""
    await service.delete_summary(caller_id, summary_id)
    return JSONResponse(content=DeleteResponse().model_dump())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
