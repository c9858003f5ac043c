"""Integration tests running the pdfb command end to end."""

import json
import zipfile

import pytest
from pypdf import PdfReader

from pdfbatch.cli import main


@pytest.mark.integration
class TestCliIntegration:

    def test_process_job(self, temp_dir, temp_multi_page_pdf, server_config_file, make_archive, make_config):
        archive = make_archive(
            temp_dir / "incoming" / "job.zip",
            {"doc.pdf": temp_multi_page_pdf},
            make_config("MakeCopies", MakeCopies={"NumberOfCopies": 2}),
        )

        assert main(["-c", str(server_config_file), str(archive)]) == 0

        result = temp_dir / "out" / "job.zip"
        with zipfile.ZipFile(result) as out:
            out.extract("doc.pdf", temp_dir / "result")
        assert len(PdfReader(temp_dir / "result" / "doc.pdf").pages) == 8
        assert list((temp_dir / "work").iterdir()) == []
        assert "Processing: job.zip" in (temp_dir / "log" / "pdfbatch.log").read_text(encoding="utf-8")

    def test_text_convert_job(self, temp_dir, server_config_file, make_archive, make_config, make_pdf):
        source = make_pdf(temp_dir / "src" / "doc.pdf", texts=["Hello"])
        archive = make_archive(temp_dir / "job.zip", {"doc.pdf": source}, make_config("TextConvert"))

        assert main(["-c", str(server_config_file), "-q", str(archive)]) == 0

        with zipfile.ZipFile(temp_dir / "out" / "job.zip") as out:
            text = out.read("doc.txt").decode("utf-8")
        assert "||P0000000001||" in text
        assert "Hello" in text

    def test_output_override(self, temp_dir, temp_pdf, server_config_file, make_archive, make_config):
        archive = make_archive(temp_dir / "job.zip", {"a.pdf": temp_pdf}, make_config("SmartSave"))
        custom = temp_dir / "custom"

        assert main(["-c", str(server_config_file), "-o", str(custom), str(archive)]) == 0
        assert (custom / "job.zip").exists()
        assert not (temp_dir / "out" / "job.zip").exists()

    def test_failed_job_exits_zero_with_manifest(self, temp_dir, temp_pdf, server_config_file, make_archive, make_config):
        config = make_config("Split")
        config["ProcessingActions"]["Concatenate"] = True
        archive = make_archive(temp_dir / "job.zip", {"a.pdf": temp_pdf}, config)

        assert main(["-c", str(server_config_file), "-q", str(archive)]) == 0

        with zipfile.ZipFile(temp_dir / "out" / "job.zip") as out:
            records = json.loads(out.read("job.error.json"))
        assert len(records) == 1
        assert "Split & Concatenate" in records[0]["Message"]

    def test_missing_archive_exits_one(self, temp_dir, server_config_file, capsys):
        result = main(["-c", str(server_config_file), str(temp_dir / "nope.zip")])

        assert result == 1
        assert "Input file does not exist" in capsys.readouterr().err
        assert not (temp_dir / "out").exists()
