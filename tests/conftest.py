"""Test configuration and fixtures."""

import pytest

from async_tar_stream import StreamConfig, TarfileHeaderCodec


@pytest.fixture
def config():
    """Default stream configuration."""
    return StreamConfig()


@pytest.fixture
def small_buffer_config():
    """Configuration with a tiny buffer to force chunked copies."""
    return StreamConfig(buffer_size=2)


@pytest.fixture
def codec():
    """Default header codec."""
    return TarfileHeaderCodec()


@pytest.fixture
def sample_files(tmp_path, monkeypatch):
    """Create regular files in a temporary working directory.

    Returns relative names so archive paths stay short.
    """
    monkeypatch.chdir(tmp_path)
    contents = {
        "a.txt": b"hello",
        "empty.bin": b"",
        "block.bin": b"x" * 512,
        "large.bin": bytes(range(256)) * 300,
    }
    for name, body in contents.items():
        (tmp_path / name).write_bytes(body)
    return contents


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")
    config.addinivalue_line(
        "markers",
        "reference: behavior still to be confirmed against reference archives",
    )
