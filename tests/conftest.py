"""
Pytest configuration and fixtures for formcheck tests

This module provides shared fixtures for unit and integration tests.
"""
import pytest

from formcheck import FileUpload, Validator, mapping_catalog


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests exercising the full validator with files on disk"
    )


# =======================
# CATALOG FIXTURES
# =======================

TEST_MESSAGES = {
    "required": "{field} is required",
    "range_val": "{field} must be between {param}",
    "min_val": "{field} must be at least {param}",
    "max_size": "{field} is larger than {param}",
    "string": "not allowed:",
    "string_numbers": "numbers",
    "string_low_strips": "underscores",
    "string_spaces": "spaces",
    "upload": "upload failed.",
    "upload_error_1": "too big for the server.",
    "unique": "{value} is taken",
    "date_field": "bad reference",
    "min_date": "on or after {param}",
    "extension": "only {param}",
    "custom": "rejected by {param}",
}


@pytest.fixture
def test_catalog():
    """
    Deterministic message catalog independent of the packaged wording

    Unknown keys render as the key itself.
    """
    return mapping_catalog(TEST_MESSAGES)


@pytest.fixture
def validator(test_catalog) -> Validator:
    """Validator with default options and the test catalog"""
    return Validator(catalog=test_catalog)


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def make_upload(tmp_path):
    """
    Factory for file descriptors backed by real temporary files

    Usage:
        upload = make_upload("photo.jpg", size=1024)
    """
    def factory(name: str = "file.txt", size: int = 10, error: int = 0, exists: bool = True) -> dict:
        path = tmp_path / f"upload_{name}"
        if exists:
            path.write_bytes(b"x" * min(size, 64))
        return {"name": name, "size": size, "error": error, "tmp_path": str(path)}

    return factory


@pytest.fixture
def uploaded_file(make_upload) -> FileUpload:
    """A successfully uploaded 2 KB PDF"""
    return FileUpload(**make_upload("report.pdf", size=2048))
