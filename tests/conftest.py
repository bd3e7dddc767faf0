"""Shared pytest configuration and fixtures for the colorsampler test suite."""

import sys
from pathlib import Path

import pytest
from PIL import Image

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "hardware: mark test as requiring a physical camera"
    )


def pytest_addoption(parser):
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Run tests that require a physical camera",
    )


def pytest_collection_modifyitems(config, items):
    """Skip hardware tests unless --run-hardware is specified."""
    if config.getoption("--run-hardware"):
        return

    skip_hardware = pytest.mark.skip(reason="Need --run-hardware option to run")
    for item in items:
        if "hardware" in item.keywords:
            item.add_marker(skip_hardware)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def make_photo(tmp_path):
    """Write a solid-color photo and return its path.

    ``center`` paints a square of a second color around the center of the
    photo as it appears after a 90 degree rotation.
    """

    def _make(width=120, height=80, color=(10, 20, 30), center=None, name="photo.png"):
        image = Image.new("RGB", (width, height), color)
        if center is not None:
            # rotation swaps the axes, so the rotated center is the same pixel
            cx, cy = width // 2, height // 2
            image.paste(center, (cx - 40, cy - 40, cx + 40, cy + 40))
        path = tmp_path / name
        image.save(path)
        return path

    return _make
