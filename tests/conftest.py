"""
Pytest configuration and shared fixtures for pyver tests.
"""

import io
import logging
import shutil
import tarfile
from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access and a C toolchain",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Helpers
# ============================================================================


def make_source_tarball(path: Path, top_dir: str, files=None) -> Path:
    """
    Write a gzip tarball containing a single top-level directory.

    Args:
        path: Archive path to create
        top_dir: Name of the directory inside the archive
        files: Mapping of relative file name to text content

    Returns:
        The archive path
    """
    files = files or {"configure": "#!/bin/sh\nexit 0\n", "README.rst": "Python\n"}

    with tarfile.open(path, "w:gz") as tar:
        info = tarfile.TarInfo(top_dir)
        info.type = tarfile.DIRTYPE
        info.mode = 0o755
        tar.addfile(info)

        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{top_dir}/{name}")
            info.size = len(data)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(data))

    return path


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def make_tarball():
    """Factory fixture for source tarballs, see make_source_tarball."""
    return make_source_tarball


@pytest.fixture
def require_tar():
    """Skip the test when the system tar is unavailable."""
    if shutil.which("tar") is None:
        pytest.skip("tar executable not available")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove PYVER_ROOT so tests control root resolution explicitly."""
    monkeypatch.delenv("PYVER_ROOT", raising=False)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch, clean_env) -> Path:
    """Create isolated home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))

    return fake_home


@pytest.fixture
def pyver_root(tmp_path: Path) -> Path:
    """
    Create an empty pyver root with sources/ and versions/.

    Returns:
        Path to root directory
    """
    root = tmp_path / "pyver"
    root.mkdir()
    (root / "sources").mkdir()
    (root / "versions").mkdir()
    return root


@pytest.fixture
def pyver_root_with_versions(pyver_root: Path) -> Path:
    """
    Create a pyver root with installed versions 3.9.1 and 3.11.4.

    Each version holds a ``bin/python3`` placeholder.
    """
    for version in ("3.9.1", "3.11.4"):
        bin_dir = pyver_root / "versions" / version / "bin"
        bin_dir.mkdir(parents=True)
        (bin_dir / "python3").write_text("#!/bin/sh\n")
    return pyver_root


@pytest.fixture
def source_archive(pyver_root: Path) -> Path:
    """
    Place ``Python-3.11.4.tgz`` in ``sources/3.11.4`` (not yet extracted).

    Returns:
        Path to the archive
    """
    version_dir = pyver_root / "sources" / "3.11.4"
    version_dir.mkdir()
    return make_source_tarball(version_dir / "Python-3.11.4.tgz", "Python-3.11.4")


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging.basicConfig(force=True) calls made by the CLI."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]

    yield

    root.setLevel(level)
    root.handlers[:] = handlers
