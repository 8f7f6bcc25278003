"""
Upload rules: upload, extension, min_size and max_size.

Values are file descriptors (FileUpload or a mapping with name, size, error
and tmp_path) or, for multi-file fields, a sequentially indexed collection of
descriptors. Collections are checked element by element and stop at the first
failing file, which is reported exactly as a single-file failure would be.
"""

import os
from collections.abc import Callable, Mapping
from typing import Any

from formcheck.core.models import FileUpload, Violation
from formcheck.core.models.file_upload import UPLOAD_ERR_NO_FILE, UPLOAD_ERR_OK

from .base_validator import RuleResult, as_number, as_sequence, is_empty

SIZE_RULES = frozenset({"min_size", "max_size"})


def _each_file(value: Any, check: Callable[[Any], RuleResult]) -> RuleResult:
    """Apply a single-file check to a value or to every file of a collection."""
    files = None if FileUpload.coerce(value) is not None else as_sequence(value)
    if files is None:
        return check(value)
    for item in files:
        result = check(item)
        if result is not None:
            return result
    return None


def _is_missing_file(upload: FileUpload) -> bool:
    return upload.error != UPLOAD_ERR_OK or not upload.name


def _upload_one(item: Any) -> RuleResult:
    upload = FileUpload.coerce(item)
    if upload is None:
        return Violation(rule="upload", details=(f"upload_error_{UPLOAD_ERR_NO_FILE}",))
    if upload.error != UPLOAD_ERR_OK:
        return Violation(rule="upload", details=(f"upload_error_{upload.error}",))
    if not upload.tmp_path or not os.path.isfile(upload.tmp_path):
        return Violation(rule="upload")
    return None


def validate_upload(value: Any, param: bool, record: Mapping[str, Any]) -> RuleResult:
    """
    The field must hold a successfully transferred file.

    Fails when no descriptor was submitted, when the transport reported an
    error code, or when the temporary file does not exist.
    """
    if not param:
        return None
    if is_empty(value):
        return Violation(rule="upload", details=(f"upload_error_{UPLOAD_ERR_NO_FILE}",))
    return _each_file(value, _upload_one)


def _file_size(item: Any) -> int | float | None:
    upload = FileUpload.coerce(item)
    if upload is not None:
        return None if _is_missing_file(upload) else upload.size
    return as_number(item)


def _size_check(rule: str, value: Any, passes) -> RuleResult:
    def check(item: Any) -> RuleResult:
        size = _file_size(item)
        if size is not None and not passes(size):
            return Violation(rule=rule)
        return None

    if is_empty(value):
        return None
    return _each_file(value, check)


def validate_min_size(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    """Files must weigh at least param bytes. Missing files are left to upload."""
    return _size_check("min_size", value, lambda size: size >= param)


def validate_max_size(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    """Files must weigh at most param bytes. Missing files are left to upload."""
    return _size_check("max_size", value, lambda size: size <= param)


def _extension_of(item: Any) -> str | None:
    upload = FileUpload.coerce(item)
    if upload is not None:
        return None if _is_missing_file(upload) else upload.extension
    if isinstance(item, str) and item:
        return item.rsplit(".", 1)[-1].lower()
    return None


def validate_extension(value: Any, param: tuple[str, ...], record: Mapping[str, Any]) -> RuleResult:
    """
    The file extension must be one of the allowed ones.

    Plain string values are read as a file name or a bare extension.
    """
    def check(item: Any) -> RuleResult:
        extension = _extension_of(item)
        if extension is not None and extension not in param:
            return Violation(rule="extension")
        return None

    if is_empty(value):
        return None
    return _each_file(value, check)
