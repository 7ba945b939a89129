"""Tests for TrialRunner and the cargo invocation seam."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
import tomlkit

from build_tool import BuildResult, CargoBuilder
from errors import BuildToolError, ManifestError
from trial import TrialRunner


class TestCargoBuilder:
    """Tests for the subprocess contract."""

    @patch("build_tool.subprocess.run")
    def test_probe_captures_stderr(self, mock_run, tmp_path):
        """Test the probe build pipes stderr."""
        mock_run.return_value = MagicMock(returncode=101, stderr=b"error: failed to select a version for `foo`")
        result = CargoBuilder(str(tmp_path)).probe()
        assert result == BuildResult(False, "error: failed to select a version for `foo`")
        args, kwargs = mock_run.call_args
        assert args[0] == ["cargo", "build"]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["stderr"] == subprocess.PIPE

    @patch("build_tool.subprocess.run")
    def test_probe_success(self, mock_run, tmp_path):
        """Test a zero exit status is a successful probe."""
        mock_run.return_value = MagicMock(returncode=0, stderr=b"")
        assert CargoBuilder(str(tmp_path)).probe().success is True

    @patch("build_tool.subprocess.run")
    def test_trial_passes_manifest_and_inherits_output(self, mock_run, tmp_path):
        """Test trial builds pass --manifest-path and inherit output."""
        mock_run.return_value = MagicMock(returncode=0)
        result = CargoBuilder(str(tmp_path), command="/opt/cargo").build_with_manifest("/p/Cargo.winch.toml")
        assert result.success is True
        args, kwargs = mock_run.call_args
        assert args[0] == ["/opt/cargo", "build", "--manifest-path", "/p/Cargo.winch.toml"]
        assert "stderr" not in kwargs and "stdout" not in kwargs

    @patch("build_tool.subprocess.run")
    def test_missing_executable(self, mock_run, tmp_path):
        """Test a missing cargo raises BuildToolError."""
        mock_run.side_effect = FileNotFoundError("cargo")
        with pytest.raises(BuildToolError):
            CargoBuilder(str(tmp_path)).probe()


class TestTrialRunner:
    """Tests for one trial's file handling."""

    def test_writes_trial_manifest_and_leaves_source(self, project_dir, sample_manifest):
        """Test a failed trial leaves Cargo.toml untouched."""
        builder = MagicMock()
        builder.build_with_manifest.return_value = BuildResult(False)
        runner = TrialRunner(str(project_dir), builder)

        assert runner.run({"foo": "1.2.0"}) is False

        trial_file = project_dir / "Cargo.winch.toml"
        assert trial_file.exists()
        assert tomlkit.parse(trial_file.read_text(encoding="utf-8"))["dependencies"]["foo"] == "1.2.0"
        assert (project_dir / "Cargo.toml").read_text(encoding="utf-8") == sample_manifest
        builder.build_with_manifest.assert_called_once_with(str(trial_file))

    def test_each_trial_starts_from_source(self, project_dir):
        """Test trials do not inherit earlier assignments."""
        builder = MagicMock()
        builder.build_with_manifest.return_value = BuildResult(False)
        runner = TrialRunner(str(project_dir), builder)

        runner.run({"foo": "1.2.0", "newcrate": "0.5.0"})
        runner.run({"foo": "1.1.0"})

        parsed = tomlkit.parse((project_dir / "Cargo.winch.toml").read_text(encoding="utf-8"))
        assert parsed["dependencies"]["foo"] == "1.1.0"
        assert "newcrate" not in parsed["dependencies"]

    def test_success_keeps_rendered_text(self, project_dir):
        """Test the built text is kept for persistence."""
        builder = MagicMock()
        builder.build_with_manifest.return_value = BuildResult(True)
        runner = TrialRunner(str(project_dir), builder)

        assert runner.run({"foo": "1.2.0"}) is True
        assert runner.last_rendered == (project_dir / "Cargo.winch.toml").read_text(encoding="utf-8")

    def test_missing_source_manifest(self, tmp_path):
        """Test a missing Cargo.toml raises ManifestError."""
        runner = TrialRunner(str(tmp_path), MagicMock())
        with pytest.raises(ManifestError):
            runner.run({"foo": "1.0.0"})
