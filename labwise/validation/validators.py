# labwise/validation/validators.py
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from labwise.commons.errors import FileTooLargeError, LowQualityScanError, UnsupportedDocumentError

SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp", ".pdf")
MIN_TEXT_CHARS = 10


class DocumentUpload(BaseModel):
    filename: str
    size_bytes: int
    max_bytes: int

    @field_validator("filename")
    @classmethod
    def _supported_extension(cls, v: str):
        if Path(v).suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file type '{Path(v).suffix or v}'")
        return v

    @model_validator(mode="after")
    def _within_limit(self):
        if self.size_bytes > self.max_bytes:
            raise ValueError(
                f"File too large ({self.size_bytes} bytes). "
                f"Please use a file smaller than {self.max_bytes // (1024 * 1024)}MB."
            )
        return self


class RecognizedText(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def _enough_text(cls, v: str):
        if len((v or "").strip()) < MIN_TEXT_CHARS:
            raise ValueError("Very little text was extracted")
        return v


def validate_document_or_raise(filename: str, size_bytes: int, max_bytes: int) -> None:
    """Lanza FileTooLargeError / UnsupportedDocumentError antes de llamar al OCR."""
    try:
        DocumentUpload(filename=filename, size_bytes=size_bytes, max_bytes=max_bytes)
    except ValidationError as ve:
        err = ve.errors()[0]
        if err["loc"] and err["loc"][0] == "filename":
            raise UnsupportedDocumentError(
                f"{err['msg'].removeprefix('Value error, ')}. "
                f"Supported types: {', '.join(SUPPORTED_EXTENSIONS)}"
            ) from ve
        raise FileTooLargeError(err["msg"].removeprefix("Value error, ")) from ve


def validate_text_or_raise(text: str) -> str:
    try:
        return RecognizedText(text=text).text
    except ValidationError as ve:
        raise LowQualityScanError(
            "Very little text was extracted. Please ensure the image is clear and contains readable text."
        ) from ve
