"""Tests for the rpm2cpio and rpm query clients."""

import subprocess
from unittest.mock import patch, MagicMock

import pytest

from srpmimport.exit_codes import ToolError, MetadataError, TOOL_ERROR, METADATA_ERROR
from srpmimport.infra.rpm_tools import Rpm2CpioClient, RpmQueryClient, METADATA_QUERYFORMAT


class TestRpm2CpioClient:
    """Tests for Rpm2CpioClient."""

    @patch('srpmimport.infra.rpm_tools.subprocess.run')
    def test_convert_returns_stdout(self, mock_run):
        mock_run.return_value = MagicMock(stdout=b"070701...", returncode=0)

        client = Rpm2CpioClient()
        assert client.convert("/tmp/foo.src.rpm") == b"070701..."

        args, kwargs = mock_run.call_args
        assert args[0] == ["rpm2cpio", "/tmp/foo.src.rpm"]
        assert kwargs['check'] is True
        assert kwargs['timeout'] is None

    @patch('srpmimport.infra.rpm_tools.subprocess.run')
    def test_custom_executable(self, mock_run):
        mock_run.return_value = MagicMock(stdout=b"", returncode=0)

        Rpm2CpioClient("/opt/bin/rpm2cpio", timeout=5).convert("x.src.rpm")

        args, kwargs = mock_run.call_args
        assert args[0][0] == "/opt/bin/rpm2cpio"
        assert kwargs['timeout'] == 5

    @patch('srpmimport.infra.rpm_tools.subprocess.run', side_effect=FileNotFoundError)
    def test_missing_tool(self, mock_run):
        with pytest.raises(ToolError, match="rpm2cpio is missing") as exc_info:
            Rpm2CpioClient().convert("x.src.rpm")
        assert exc_info.value.exit_code == TOOL_ERROR

    @patch('srpmimport.infra.rpm_tools.subprocess.run')
    def test_nonzero_exit(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["rpm2cpio"], output=b"", stderr=b"error: not an rpm package"
        )
        with pytest.raises(ToolError, match="not an rpm package"):
            Rpm2CpioClient().convert("x.src.rpm")

    @patch('srpmimport.infra.rpm_tools.subprocess.run')
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(["rpm2cpio"], 5)
        with pytest.raises(ToolError, match="timed out"):
            Rpm2CpioClient(timeout=5).convert("x.src.rpm")


class TestRpmQueryClient:
    """Tests for RpmQueryClient."""

    @patch('srpmimport.infra.rpm_tools.subprocess.run')
    def test_query_command(self, mock_run):
        mock_run.return_value = MagicMock(stdout="SOURCE\tfoo.tar.gz\n", returncode=0)

        output = RpmQueryClient().query("/tmp/foo.src.rpm")

        assert output == "SOURCE\tfoo.tar.gz\n"
        cmd = mock_run.call_args[0][0]
        assert cmd[:2] == ["rpm", "-qp"]
        assert "--queryformat" in cmd
        assert cmd[cmd.index("--queryformat") + 1] == METADATA_QUERYFORMAT
        assert cmd[-1] == "/tmp/foo.src.rpm"

    @patch('srpmimport.infra.rpm_tools.subprocess.run', side_effect=FileNotFoundError)
    def test_missing_rpm(self, mock_run):
        with pytest.raises(MetadataError, match="rpm is missing") as exc_info:
            RpmQueryClient().query("x.src.rpm")
        assert exc_info.value.exit_code == METADATA_ERROR

    @patch('srpmimport.infra.rpm_tools.subprocess.run')
    def test_invalid_package(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["rpm"], output="", stderr="error: x.src.rpm: not an rpm package"
        )
        with pytest.raises(MetadataError, match="invalid"):
            RpmQueryClient().query("x.src.rpm")
