"""FastAPI dependencies resolving the objects built at startup."""

from fastapi import Request

from file_processor.config import Settings
from file_processor.services.pipeline import FileProcessingPipeline


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_pipeline(request: Request) -> FileProcessingPipeline:
    """Processing pipeline built in the application lifespan."""
    return request.app.state.pipeline
