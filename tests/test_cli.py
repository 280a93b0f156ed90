"""Tests for the command line interface."""

import json
import logging

import pytest

from resume_ats import generator
from resume_ats.logging_config import LOGGER_NAME
from resume_ats.main import main
from resume_ats.models import PersonalInfo, Resume
from resume_ats.storage import load_resume, save_resume


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # main() attaches a handler to the captured stderr of the current test
    logging.getLogger(LOGGER_NAME).handlers.clear()


@pytest.fixture
def resume_file(tmp_path, scenario_a_resume):
    return str(save_resume(tmp_path / "resume.json", scenario_a_resume))


@pytest.fixture
def job_file(tmp_path, scenario_a_job):
    path = tmp_path / "job.txt"
    path.write_text(scenario_a_job.description, encoding="utf-8")
    return str(path)


class TestAnalyzeCommand:

    def test_good_score_exits_zero(self, resume_file, job_file, capsys):
        assert main(["analyze", "-r", resume_file, "-j", job_file]) == 0
        out = capsys.readouterr().out
        assert "ATS RESUME ANALYSIS - SUMMARY" in out
        assert "62/100 (good)" in out

    def test_json_output(self, resume_file, job_file, capsys):
        assert main(["analyze", "-r", resume_file, "-j", job_file, "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["score"] == 62
        assert data["matchedKeywords"][0] == "experienced"

    def test_low_score_exits_one(self, tmp_path, project_manager_job):
        resume = str(save_resume(tmp_path / "empty.json", Resume()))
        job = tmp_path / "pm.txt"
        job.write_text(project_manager_job.description, encoding="utf-8")
        assert main(["analyze", "-r", resume, "-j", str(job)]) == 1

    def test_writes_report(self, resume_file, job_file, tmp_path, capsys):
        report = tmp_path / "reports" / "report.md"
        main(["analyze", "-r", resume_file, "-j", job_file, "-o", str(report)])
        assert report.read_text(encoding="utf-8").startswith("# ATS Resume Report")
        assert "Saving report" in capsys.readouterr().out

    def test_empty_job_description(self, resume_file, tmp_path, capsys):
        job = tmp_path / "blank.txt"
        job.write_text("  \n", encoding="utf-8")
        assert main(["analyze", "-r", resume_file, "-j", str(job)]) == 2
        assert "must not be empty" in capsys.readouterr().err

    def test_missing_resume_file(self, job_file, tmp_path, capsys):
        assert main(["analyze", "-r", str(tmp_path / "nope.json"), "-j", job_file]) == 2
        assert "File not found" in capsys.readouterr().err

    def test_corrupt_resume_file(self, job_file, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")
        assert main(["analyze", "-r", str(bad), "-j", job_file]) == 2


class TestExportCommand:

    def test_txt(self, tmp_path, full_resume):
        resume = str(save_resume(tmp_path / "resume.json", full_resume))
        out_dir = tmp_path / "out"

        assert main(["export", "-r", resume, "-f", "txt", "-o", str(out_dir)]) == 0
        assert (out_dir / "Jane Doe.txt").read_text(encoding="utf-8").startswith("Jane Doe")

    def test_pdf_without_pdflatex(self, tmp_path, full_resume, monkeypatch, capsys):
        monkeypatch.setattr(generator, "pdflatex_available", lambda: False)
        resume = str(save_resume(tmp_path / "resume.json", full_resume))

        assert main(["export", "-r", resume, "-f", "pdf", "-o", str(tmp_path / "out")]) == 1
        assert "Please try again." in capsys.readouterr().err


class TestInitCommand:

    def test_creates_empty_resume_once(self, tmp_path):
        path = tmp_path / "new.json"
        assert main(["init", "-o", str(path)]) == 0
        assert load_resume(path) == Resume()
        assert main(["init", "-o", str(path)]) == 1

    def test_default_location_is_the_saved_resume(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RESUME_ATS_DATA_DIR", str(tmp_path / "data"))
        assert main(["init"]) == 0
        assert (tmp_path / "data" / "resume-data.json").exists()


class TestSavedResumeDefault:

    def test_analyze_and_export_without_resume_path(self, tmp_path, monkeypatch, full_resume, job_file):
        data_dir = tmp_path / "data"
        monkeypatch.setenv("RESUME_ATS_DATA_DIR", str(data_dir))
        save_resume(data_dir / "resume-data.json", full_resume)

        assert main(["analyze", "-j", job_file, "--json"]) in (0, 1)
        assert main(["export", "-f", "txt", "-o", str(tmp_path / "out")]) == 0
        assert (tmp_path / "out" / "Jane Doe.txt").exists()

    def test_missing_saved_resume(self, tmp_path, monkeypatch, job_file, capsys):
        monkeypatch.setenv("RESUME_ATS_DATA_DIR", str(tmp_path / "empty"))
        assert main(["analyze", "-j", job_file]) == 2
        assert "File not found" in capsys.readouterr().err


class TestUnreadableInput:
    """Files that are not UTF-8 are reported as bad input."""

    def test_job_file_in_legacy_encoding(self, resume_file, tmp_path, capsys):
        job = tmp_path / "job.txt"
        job.write_bytes("Engineer – Python and SQL".encode("cp1252"))
        assert main(["analyze", "-r", resume_file, "-j", str(job)]) == 2
        assert "not UTF-8" in capsys.readouterr().err

    def test_resume_file_in_legacy_encoding(self, job_file, tmp_path, capsys):
        resume = tmp_path / "resume.json"
        resume.write_bytes('{"personalInfo": {"fullName": "Zoë"}}'.encode("cp1252"))
        assert main(["analyze", "-r", str(resume), "-j", job_file]) == 2
        assert "not UTF-8" in capsys.readouterr().err


class TestExportFileNames:
    """The applicant's name never places the export outside the output directory."""

    @pytest.fixture
    def export_with_name(self, tmp_path):
        def run(full_name):
            resume = Resume(personal_info=PersonalInfo(full_name=full_name))
            path = str(save_resume(tmp_path / "resume.json", resume))
            out_dir = tmp_path / "a" / "b" / "out"
            return main(["export", "-r", path, "-f", "txt", "-o", str(out_dir)]), out_dir
        return run

    def test_parent_directory_name(self, export_with_name, tmp_path):
        code, out_dir = export_with_name("../../escaped")
        assert code == 0
        assert [p.name for p in out_dir.iterdir()] == ["_.._escaped.txt"]
        assert not list(tmp_path.rglob("escaped.txt"))

    def test_slash_in_name(self, export_with_name):
        code, out_dir = export_with_name("AC/DC")
        assert code == 0
        assert (out_dir / "AC_DC.txt").exists()
