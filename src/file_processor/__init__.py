"""File Processor service: extract, chunk, embed and store remote documents."""

__version__ = "0.1.0"
