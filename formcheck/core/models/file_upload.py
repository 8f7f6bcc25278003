"""
FileUpload model describing an uploaded file handed over by the transport layer.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

# Transport error codes (0 means the upload succeeded)
UPLOAD_ERR_OK = 0
UPLOAD_ERR_INI_SIZE = 1
UPLOAD_ERR_FORM_SIZE = 2
UPLOAD_ERR_PARTIAL = 3
UPLOAD_ERR_NO_FILE = 4
UPLOAD_ERR_NO_TMP_DIR = 6
UPLOAD_ERR_CANT_WRITE = 7
UPLOAD_ERR_EXTENSION = 8

DESCRIPTOR_KEYS = ("name", "size", "error", "tmp_path")


class FileUpload(BaseModel):
    """
    A normalized uploaded file.

    Attributes:
        name: Client-side file name ("photo.jpg")
        size: Size in bytes
        error: Transport error code (0 = no error)
        tmp_path: Path of the temporary file holding the upload
    """

    name: str = ""
    size: int = Field(0, ge=0)
    error: int = UPLOAD_ERR_OK
    tmp_path: str = ""

    @property
    def extension(self) -> str:
        """Lower-case extension of the file name without the dot."""
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()

    @classmethod
    def coerce(cls, value: Any) -> "FileUpload | None":
        """
        Build a FileUpload from a descriptor mapping.

        Returns None when the value is not a well-formed file descriptor.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping) or not any(k in value for k in DESCRIPTOR_KEYS):
            return None
        try:
            return cls.model_validate({k: value[k] for k in DESCRIPTOR_KEYS if k in value})
        except ValidationError:
            return None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "invoice.pdf",
                "size": 48213,
                "error": 0,
                "tmp_path": "/tmp/upload_8f2a1c",
            }
        }
