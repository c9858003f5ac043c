"""Tests for pdfbatch.cli module."""

import logging
from pathlib import Path
from unittest.mock import patch

from pdfbatch.cli import create_parser, main, resolve_server_config
from pdfbatch.constants import DEFAULT_LOG_DIR


class TestCreateParser:
    """Test argument parser creation."""

    def test_parser_creation(self):
        parser = create_parser()
        assert parser.prog == "pdfb"

    def test_version_flag(self):
        args = create_parser().parse_args(["-V"])
        assert args.version is True

    def test_archive_positional(self):
        args = create_parser().parse_args(["job.zip"])
        assert args.archive == Path("job.zip")

    def test_server_config_flag(self):
        args = create_parser().parse_args(["-c", "server.yaml", "job.zip"])
        assert args.server_config == Path("server.yaml")

    def test_directory_overrides(self):
        args = create_parser().parse_args(["-o", "./out", "-w", "./work", "job.zip"])
        assert args.output == Path("./out")
        assert args.work_dir == Path("./work")

    def test_verbosity(self):
        args = create_parser().parse_args(["-vv", "job.zip"])
        assert args.verbose == 2


class TestResolveServerConfig:

    def test_defaults_without_file(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        config = resolve_server_config(None)
        assert config.directories.log_dir == Path(DEFAULT_LOG_DIR)

    def test_default_file_in_cwd(self, temp_dir, monkeypatch):
        (temp_dir / "serverconfig.yaml").write_text("directories:\n  out_dir: results\n")
        monkeypatch.chdir(temp_dir)
        assert resolve_server_config(None).directories.out_dir == Path("results")

    def test_explicit_file(self, server_config_file, temp_dir):
        config = resolve_server_config(server_config_file)
        assert config.directories.work_dir == temp_dir / "work"


class TestMain:
    """Test main CLI entry point."""

    def test_version_returns_0(self, caplog):
        with caplog.at_level(logging.INFO, logger="pdfbatch"):
            result = main(["--version"])
        assert result == 0
        assert "pdfbatch" in caplog.text

    def test_no_archive(self, capsys):
        result = main([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage" in captured.err.lower()
        assert "No input file given" in captured.err

    def test_missing_archive(self, temp_dir, capsys):
        result = main([str(temp_dir / "missing.zip")])
        assert result == 1
        assert "Input file does not exist" in capsys.readouterr().err

    def test_bad_server_config(self, temp_dir):
        archive = temp_dir / "job.zip"
        archive.write_bytes(b"")
        bad_config = temp_dir / "bad.yaml"
        bad_config.write_text("{{invalid yaml")

        assert main(["-c", str(bad_config), str(archive)]) == 1

    def test_missing_server_config(self, temp_dir):
        archive = temp_dir / "job.zip"
        archive.write_bytes(b"")
        assert main(["-c", str(temp_dir / "missing.yaml"), str(archive)]) == 1

    def test_runs_job_with_overrides(self, temp_dir, server_config_file):
        archive = temp_dir / "job.zip"
        archive.write_bytes(b"")

        with patch("pdfbatch.processor.run_job", return_value=0) as mock_run:
            result = main([
                "-c", str(server_config_file),
                "-o", str(temp_dir / "custom_out"),
                str(archive),
            ])

        assert result == 0
        called_archive, server_config = mock_run.call_args.args
        assert called_archive == archive
        assert server_config.directories.out_dir == temp_dir / "custom_out"
        assert server_config.directories.work_dir == temp_dir / "work"

    def test_log_file_in_log_dir(self, temp_dir, server_config_file):
        archive = temp_dir / "job.zip"
        archive.write_bytes(b"")

        with patch("pdfbatch.processor.run_job", return_value=0):
            main(["-c", str(server_config_file), str(archive)])

        assert (temp_dir / "log" / "pdfbatch.log").exists()

    def test_exit_status_passed_through(self, temp_dir, server_config_file):
        archive = temp_dir / "job.zip"
        archive.write_bytes(b"")

        with patch("pdfbatch.processor.run_job", return_value=1):
            assert main(["-c", str(server_config_file), str(archive)]) == 1

    def test_os_error_returns_1(self, temp_dir, server_config_file):
        archive = temp_dir / "job.zip"
        archive.write_bytes(b"")

        with patch("pdfbatch.processor.run_job", side_effect=PermissionError("denied")):
            assert main(["-c", str(server_config_file), str(archive)]) == 1
