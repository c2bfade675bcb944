"""FastAPI application entry point.

This module creates and configures the FastAPI application instance with:
- Middleware (CORS, request context)
- Exception handlers
- API routers (v1, plus /process-file and /health at root level)
- Startup/shutdown lifecycle management (pipeline and HTTP clients)
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from file_processor import __version__
from file_processor.api.v1 import health, process
from file_processor.api.v1.router import router as v1_router
from file_processor.clients.convex_client import ConvexClient
from file_processor.clients.graph_client import GraphClient
from file_processor.config import Settings, get_settings
from file_processor.middleware import RequestContextMiddleware
from file_processor.services.chunking_service import ChunkingService
from file_processor.services.document_source import OneDriveDocumentSource
from file_processor.services.embedding_service import EmbeddingService
from file_processor.services.extractor_service import ExtractorService
from file_processor.services.pipeline import FileProcessingPipeline
from file_processor.utils.errors import FileProcessorException
from file_processor.utils.logging import get_logger, log_error, setup_logging

logger = get_logger("main")


def build_pipeline(settings: Settings, convex_client: ConvexClient) -> FileProcessingPipeline:
    """Wire the pipeline and its collaborators from settings."""
    return FileProcessingPipeline(
        extractor=ExtractorService(),
        chunker=ChunkingService(settings.chunking),
        embedder=EmbeddingService(settings.embedding),
        status_gateway=convex_client,
        chunk_store=convex_client,
        document_source=OneDriveDocumentSource(convex_client, GraphClient(settings.graph)),
        max_chunk_size=settings.chunking.max_chunk_size,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the pipeline on startup and close HTTP clients on shutdown."""
        logger.info("Starting File Processor service...")
        convex_client = ConvexClient(settings.convex)
        app.state.pipeline = build_pipeline(settings, convex_client)
        logger.info(
            f"File Processor listening at http://{settings.server.host}:{settings.server.port}/health"
        )
        try:
            yield
        finally:
            logger.info("Shutting down File Processor service...")
            try:
                await convex_client.close()
            except Exception as e:
                logger.error(f"Error closing Convex client: {e}", exc_info=True)
            logger.info("File Processor service shut down")

    app = FastAPI(
        title="File Processor Service",
        description="Extracts, chunks and embeds OneDrive documents for the chatbot knowledge base",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.exception_handler(FileProcessorException)
    async def file_processor_exception_handler(request: Request, exc: FileProcessorException):
        """Handle FileProcessorException."""
        log_error(exc, path=request.url.path, method=request.method)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "message": exc.detail,
                    "code": "HTTP_ERROR",
                    "status_code": exc.status_code,
                }
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors."""
        log_error(exc, path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": {
                    "message": "Validation error",
                    "code": "VALIDATION_ERROR",
                    "status_code": 422,
                    "details": exc.errors(),
                }
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        log_error(exc, path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "message": "Internal server error",
                    "code": "INTERNAL_ERROR",
                    "status_code": 500,
                }
            },
        )

    app.include_router(v1_router)
    # Root-level routes kept for existing callers and container health checks
    app.include_router(process.router)
    app.include_router(health.router, include_in_schema=False)

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint."""
        return {
            "service": settings.app_name,
            "version": __version__,
            "status": "running",
            "environment": settings.environment.value,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "file_processor.main:app",
        host=_settings.server.host,
        port=_settings.server.port,
        reload=_settings.server.reload and _settings.is_development,
        log_level=_settings.log_level.lower(),
    )
