"""Request and response bodies for the process-file endpoint."""

from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ProcessFileRequest(BaseModel):
    """
    Body of ``POST /process-file``.

    Every field is optional at the schema level so that the secret can be
    checked before required fields are validated.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file_id: Optional[str] = Field(None, alias="fileId", description="Convex file record ID")
    one_drive_file_id: Optional[str] = Field(
        None, alias="oneDriveFileId", description="OneDrive drive item ID"
    )
    user_email: Optional[str] = Field(
        None, alias="userEmail", description="Owner whose Graph token is used for the download"
    )
    file_name: Optional[str] = Field(None, alias="fileName", description="Display name of the file")
    file_type: Optional[str] = Field(
        None, alias="fileType", description="Declared format (pdf, word, excel, powerpoint)"
    )
    secret: Optional[str] = Field(None, description="Shared secret")

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("file_id", "one_drive_file_id", "user_email", "file_name", "file_type")

    def missing_fields(self) -> List[str]:
        """Return the aliases of required fields that are missing or empty."""
        missing = []
        for name in self.REQUIRED_FIELDS:
            if not getattr(self, name):
                missing.append(type(self).model_fields[name].alias)
        return missing


class ProcessingResult(BaseModel):
    """Outcome of one file-processing run, as returned to the caller."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    chunks_created: Optional[int] = Field(None, alias="chunksCreated")
    embeddings_created: Optional[int] = Field(None, alias="embeddingsCreated")
    error: Optional[str] = None

    @classmethod
    def completed(cls, chunks_created: int, embeddings_created: int) -> "ProcessingResult":
        return cls(success=True, chunks_created=chunks_created, embeddings_created=embeddings_created)

    @classmethod
    def failed(cls, error: str) -> "ProcessingResult":
        return cls(success=False, error=error)

    def to_response(self) -> dict:
        """Serialize with camelCase keys, dropping fields that do not apply."""
        return self.model_dump(by_alias=True, exclude_none=True)
