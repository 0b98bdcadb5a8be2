from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .errors import UploadValidationError


DEFAULT_METADATA_NAME = "Stamp NFT"


class UploadRequest(BaseModel):
    file_bytes: bytes
    name: str
    description: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_form(cls, file_bytes: bytes | None, name: str | None, description: str | None) -> "UploadRequest":
        if not file_bytes:
            raise UploadValidationError("No file uploaded.")
        if not (name or "").strip():
            raise UploadValidationError("Metadata 'name' is required.")
        return cls(file_bytes=file_bytes, name=name, description=description)


class PinnedContent(BaseModel):
    content_id: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def ipfs_uri(self) -> str:
        return f"ipfs://{self.content_id}"


class MetadataDocument(BaseModel):
    name: str
    description: str
    image: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_image(cls, image: PinnedContent, name: str | None = None, description: str | None = None) -> "MetadataDocument":
        return cls(
            name=name or DEFAULT_METADATA_NAME,
            description=description or "",
            image=image.ipfs_uri,
        )


class UploadResponse(BaseModel):
    success: bool = True
    metadataURL: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str | None = None
    stack: str | None = None


class HealthResponse(BaseModel):
    success: bool = True
    message: str = "Server is running"


class RootResponse(BaseModel):
    status: str = "ok"
    message: str = "Stamp NFT API is running"
