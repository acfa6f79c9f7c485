"""Shared fixtures for all tests."""

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear all Box-related environment variables for testing.

    This ensures tests don't accidentally use real credentials or endpoints
    from the environment.
    """
    env_vars_to_clear = [
        "BOX_ACCESS_TOKEN",
        "BOX_API_URL",
        "BOX_UPLOAD_URL",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def mock_token() -> str:
    """Mock Box access token for testing."""
    return "test_token_123456789"


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., str]:
    """Factory writing a temp file and returning its path.

    ``size`` bytes of a repeating byte pattern are written unless explicit
    ``content`` is given.
    """

    def _make(name: str = "upload.bin", size: int = 0, content: bytes | None = None) -> str:
        if content is None:
            content = bytes(i % 251 for i in range(size))
        path = tmp_path / name
        path.write_bytes(content)
        return os.fspath(path)

    return _make
