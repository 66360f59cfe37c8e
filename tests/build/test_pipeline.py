"""
Unit tests for build pipeline module.
"""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import responses

from pyver.build.executor import BuildExecutor
from pyver.build.pipeline import BuildPipeline, ensure_installed
from pyver.core.config import PyverConfig
from pyver.core.exceptions import DownloadError, NotFoundError

PYTHON_URL = "https://www.python.org/ftp/python/3.11.4/Python-3.11.4.tgz"


@pytest.fixture
def stages():
    """
    Patch fetch and extraction with fakes that touch the filesystem.

    Returns a Mock whose mock_calls record the stage order.
    """
    manager = Mock()

    def fake_fetch(directory, version, config=None):
        archive = Path(directory) / f"Python-{version}.tgz"
        archive.write_bytes(b"tarball")
        return archive

    def fake_extract(directory, archive):
        unpacked = Path(directory) / "Python-3.11.4"
        unpacked.mkdir()
        return unpacked

    manager.fetch.side_effect = fake_fetch
    manager.extract.side_effect = fake_extract

    with patch("pyver.core.download.fetch_archive", manager.fetch), patch(
        "pyver.build.pipeline.extract_and_locate", manager.extract
    ):
        yield manager


class TestBuildPipeline:
    """Tests for BuildPipeline class."""

    def test_uses_config_root(self, tmp_path):
        """Test config root is used when no explicit root is given."""
        pipeline = BuildPipeline(config=PyverConfig(root=str(tmp_path)))
        assert pipeline.root == str(tmp_path)

    def test_explicit_root_wins(self, tmp_path):
        """Test explicit root beats config root."""
        pipeline = BuildPipeline(
            root=str(tmp_path / "explicit"), config=PyverConfig(root="/elsewhere")
        )
        assert pipeline.root == str(tmp_path / "explicit")

    def test_executor_built_from_config(self):
        """Test default executor picks up build settings."""
        pipeline = BuildPipeline(
            config=PyverConfig(configure_args=["--with-lto"], jobs=3)
        )
        assert pipeline.executor.configure_args == ["--with-lto"]
        assert pipeline.executor.jobs == 3

    def test_fresh_root_runs_every_stage_once_in_order(self, tmp_path, stages):
        """Test fetch, extract and build happen exactly once, in order."""
        root = tmp_path / "pyver"
        stages.executor = Mock(spec=BuildExecutor)
        pipeline = BuildPipeline(root=str(root), executor=stages.executor)

        prefix = pipeline.ensure_installed("3.11.4", dry_run=False)

        assert prefix == root / "versions" / "3.11.4"
        assert [c[0] for c in stages.mock_calls] == [
            "fetch",
            "extract",
            "executor.build_and_install",
        ]
        stages.executor.build_and_install.assert_called_once_with(
            root / "sources" / "3.11.4" / "Python-3.11.4", prefix, dry_run=False
        )

    def test_cached_archive_is_not_fetched(self, pyver_root, source_archive, stages):
        """Test cache hit on the archive skips the network."""
        pipeline = BuildPipeline(root=str(pyver_root), executor=Mock())

        pipeline.ensure_installed("3.11.4")

        stages.fetch.assert_not_called()
        stages.extract.assert_called_once_with(
            pyver_root / "sources" / "3.11.4", source_archive
        )

    def test_unpacked_source_is_not_extracted(self, pyver_root, stages):
        """Test an existing extracted tree skips fetch and extraction."""
        unpacked = pyver_root / "sources" / "3.11.4" / "Python-3.11.4"
        unpacked.mkdir(parents=True)
        executor = Mock()
        pipeline = BuildPipeline(root=str(pyver_root), executor=executor)

        pipeline.ensure_installed("3.11.4")

        stages.fetch.assert_not_called()
        stages.extract.assert_not_called()
        executor.build_and_install.assert_called_once_with(
            unpacked, pyver_root / "versions" / "3.11.4", dry_run=True
        )

    def test_dry_run_never_invokes_toolchain(self, tmp_path, stages):
        """Test default dry run does not run configure/make."""
        with patch("pyver.build.executor.subprocess.run") as mock_run:
            BuildPipeline(root=str(tmp_path / "pyver")).ensure_installed("3.11.4")

        mock_run.assert_not_called()
        stages.fetch.assert_called_once()
        stages.extract.assert_called_once()

    def test_download_failure_propagates(self, tmp_path):
        """Test DownloadError aborts the pipeline before any build."""
        executor = Mock()

        with patch(
            "pyver.core.download.fetch_archive",
            side_effect=DownloadError(PYTHON_URL, "404"),
        ):
            with pytest.raises(DownloadError):
                BuildPipeline(
                    root=str(tmp_path / "pyver"), executor=executor
                ).ensure_installed("3.11.4", dry_run=False)

        executor.build_and_install.assert_not_called()

    def test_leftover_state_is_kept_on_failure(self, pyver_root, source_archive):
        """Test nothing is rolled back when extraction finds no directory."""
        with patch(
            "pyver.core.filesystem.subprocess.run",
            return_value=subprocess.CompletedProcess([], 2),
        ):
            with pytest.raises(NotFoundError, match="unpacked"):
                BuildPipeline(root=str(pyver_root)).find_or_extract("3.11.4")

        assert source_archive.exists()


class TestFindOrExtract:
    """Tests for the source unpacking sub-operation."""

    def test_extracts_cached_archive(self, pyver_root, source_archive, require_tar):
        """Test tar runs once against the archive and the new tree is returned."""
        real_run = subprocess.run

        with patch(
            "pyver.core.filesystem.subprocess.run", side_effect=real_run
        ) as mock_run:
            result = BuildPipeline(root=str(pyver_root)).find_or_extract("3.11.4")

        assert mock_run.call_count == 1
        assert mock_run.call_args.args[0][-1] == str(source_archive)
        assert result == pyver_root / "sources" / "3.11.4" / "Python-3.11.4"
        assert result.is_dir()

    def test_second_call_reuses_extraction(self, pyver_root, source_archive, require_tar):
        """Test extraction is idempotent by skip."""
        pipeline = BuildPipeline(root=str(pyver_root))
        first = pipeline.find_or_extract("3.11.4")

        with patch("pyver.core.filesystem.subprocess.run") as mock_run:
            second = pipeline.find_or_extract("3.11.4")

        mock_run.assert_not_called()
        assert first == second

    @responses.activate
    def test_end_to_end_download_and_extract(self, tmp_path, make_tarball, require_tar):
        """Test a fresh root downloads and unpacks the archive."""
        tarball = make_tarball(tmp_path / "upstream.tgz", "Python-3.11.4")
        responses.add(
            responses.GET, PYTHON_URL, body=tarball.read_bytes(), status=200
        )
        root = tmp_path / "pyver"

        result = BuildPipeline(root=str(root)).find_or_extract("3.11.4")

        assert (root / "sources" / "3.11.4" / "Python-3.11.4.tgz").is_file()
        assert result == root / "sources" / "3.11.4" / "Python-3.11.4"
        assert (result / "configure").is_file()


class TestEnsureInstalledFunction:
    """Tests for module-level ensure_installed."""

    def test_delegates_to_pipeline(self, tmp_path):
        """Test the convenience function runs a pipeline."""
        with patch("pyver.build.pipeline.BuildPipeline") as mock_cls:
            mock_cls.return_value.ensure_installed.return_value = tmp_path
            result = ensure_installed(str(tmp_path), "3.11.4", dry_run=False)

        mock_cls.assert_called_once_with(root=str(tmp_path), config=None)
        mock_cls.return_value.ensure_installed.assert_called_once_with(
            "3.11.4", dry_run=False
        )
        assert result == tmp_path


@pytest.mark.integration
@pytest.mark.slow
def test_real_build(tmp_path):
    """Fetch, build and install a real CPython release."""
    prefix = ensure_installed(str(tmp_path / "pyver"), "3.12.1", dry_run=False)
    assert (prefix / "bin" / "python3").exists()
