"""Pytest configuration for AC remote IR tests."""

import os
from pathlib import Path

import pytest

from acremote_ir import Code, parse_codes

# All-default state: AUTO, off, 16 °C, no timer (checksum 0xC)
DEFAULT_FRAME = (
    "S 00000000 00000000 00000000 00001010 010"
    " _ 00000000 00000100 00000000 0000 0011 $"
)

# COLD, on, fan LEVEL2, 24 °C, light (checksum 0xD)
SAMPLE_FRAME = (
    "S 10010100 00010000 00000100 00001010 010"
    " _ 00000000 00000100 00000000 0000 1011 $"
)


def _load_dotenv() -> None:
    """Load .env file if it exists."""
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ.setdefault(key.strip(), value.strip())


# Load .env at import time
_load_dotenv()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom command-line options for capture replay tests."""
    parser.addoption(
        "--capture-file",
        action="store",
        default=None,
        help="File of frames captured from a real remote, one per line in capture notation",
    )


@pytest.fixture
def capture_file(request: pytest.FixtureRequest) -> Path | None:
    """Fixture providing the capture file from CLI, env, or None to skip."""
    path = request.config.getoption("--capture-file") or os.environ.get("CAPTURE_FILE")
    return Path(path) if path else None


@pytest.fixture
def default_frame() -> list[Code]:
    return parse_codes(DEFAULT_FRAME)


@pytest.fixture
def sample_frame() -> list[Code]:
    return parse_codes(SAMPLE_FRAME)
