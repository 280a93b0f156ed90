"""Tests for the web API."""

import pytest
from fastapi.testclient import TestClient

import web.app as web_app
from resume_ats.generator import ExportError
from resume_ats.models import PersonalInfo, Resume


@pytest.fixture
def client():
    return TestClient(web_app.app)


@pytest.fixture
def analyze_payload(scenario_a_resume, scenario_a_job):
    return {
        "resume": scenario_a_resume.to_dict(),
        "job_description": scenario_a_job.to_dict(),
    }


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["export_formats"] == ["tex", "txt", "docx", "pdf"]
        assert isinstance(data["pdflatex"], bool)


class TestAnalyze:

    def test_scores_resume(self, client, analyze_payload):
        response = client.post("/api/analyze", json=analyze_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 62
        assert data["rating"] == "good"
        assert data["missingKeywords"] == ["looking", "for", "with", "and", "skills"]
        assert data["analysis"]["formatScore"] == 75
        assert data["structureScore"] == 60

    def test_empty_description_rejected(self, client, analyze_payload):
        analyze_payload["job_description"]["description"] = "   "
        response = client.post("/api/analyze", json=analyze_payload)
        assert response.status_code == 400

    def test_malformed_resume_rejected(self, client, analyze_payload):
        analyze_payload["resume"] = {"skills": "Python, Go"}
        response = client.post("/api/analyze", json=analyze_payload)
        assert response.status_code == 400

    def test_clamp_option(self, client):
        skills = [{"name": name} for name in ("database", "datastore", "metadata", "dataset")]
        payload = {"resume": {"skills": skills}, "job_description": {"description": "data"}}

        assert client.post("/api/analyze", json=payload).json()["score"] > 100

        payload["clamp_score"] = True
        assert client.post("/api/analyze", json=payload).json()["score"] == 100

    def test_report(self, client, analyze_payload):
        response = client.post("/api/report", json=analyze_payload)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/markdown")
        assert "## ATS Score: 62/100 (good)" in response.text


class TestExport:

    def test_tex(self, client, full_resume):
        response = client.post("/api/export/tex", json={"resume": full_resume.to_dict()})
        assert response.status_code == 200
        assert 'filename="Jane Doe.tex"' in response.headers["content-disposition"]
        assert response.text.startswith("\\documentclass")

    def test_txt(self, client, full_resume):
        response = client.post("/api/export/txt", json={"resume": full_resume.to_dict()})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "=== Skills ===" in response.text

    def test_docx(self, client, full_resume):
        response = client.post("/api/export/docx", json={"resume": full_resume.to_dict()})
        assert response.status_code == 200
        assert response.content[:2] == b"PK"

    def test_non_ascii_filename(self, client):
        resume = Resume(personal_info=PersonalInfo(full_name="José Núñez"))
        response = client.post("/api/export/txt", json={"resume": resume.to_dict()})
        assert "filename*=UTF-8''Jos%C3%A9%20N%C3%BA%C3%B1ez.txt" in response.headers["content-disposition"]

    def test_path_characters_stripped_from_filename(self, client):
        resume = Resume(personal_info=PersonalInfo(full_name="../../etc/AC/DC"))
        response = client.post("/api/export/tex", json={"resume": resume.to_dict()})
        disposition = response.headers["content-disposition"]
        assert 'filename="_.._etc_AC_DC.tex"' in disposition
        assert "/" not in disposition

    def test_empty_resume_falls_back_to_generic_name(self, client):
        response = client.post("/api/export/tex", json={"resume": {}})
        assert 'filename="resume.tex"' in response.headers["content-disposition"]


class TestExportPdf:

    def test_local_pdflatex(self, client, full_resume, monkeypatch):
        monkeypatch.setattr(web_app, "pdflatex_available", lambda: True)
        monkeypatch.setattr(web_app, "compile_pdf", lambda latex: b"%PDF-local")

        response = client.post("/api/export/pdf", json={"resume": full_resume.to_dict()})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content == b"%PDF-local"

    def test_online_fallback(self, client, full_resume, monkeypatch):
        seen = []

        async def fake_online(latex):
            seen.append(latex)
            return b"%PDF-online"

        monkeypatch.setattr(web_app, "pdflatex_available", lambda: False)
        monkeypatch.setattr(web_app, "compile_pdf_online", fake_online)

        response = client.post("/api/export/pdf", json={"resume": full_resume.to_dict()})
        assert response.status_code == 200
        assert response.content == b"%PDF-online"
        assert seen[0].startswith("\\documentclass")

    def test_failure_reports_retry(self, client, full_resume, monkeypatch):
        async def failing(latex):
            raise ExportError("Online LaTeX compilation failed: boom")

        monkeypatch.setattr(web_app, "pdflatex_available", lambda: False)
        monkeypatch.setattr(web_app, "compile_pdf_online", failing)

        response = client.post("/api/export/pdf", json={"resume": full_resume.to_dict()})
        assert response.status_code == 500
        assert response.json()["detail"].endswith("Please try again.")
