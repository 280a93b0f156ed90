"""
FastAPI web application for the ATS Resume Builder.
Scores resumes against job descriptions and exports resume documents.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, Field

from resume_ats import __version__
from resume_ats.analyzer import ATSAnalyzer
from resume_ats.config import ScoringConfig, log_level
from resume_ats.generator import (
    MEDIA_TYPES,
    DocxExporter,
    ExportError,
    LatexResumeGenerator,
    PlainTextExporter,
    compile_pdf,
    compile_pdf_online,
    export_filename,
    pdflatex_available,
)
from resume_ats.logging_config import setup_logging
from resume_ats.models import InvalidInputError, JobDescription, Resume, ResumeFormatError
from resume_ats.report import render_report

logger = logging.getLogger("resume_ats.web")


@asynccontextmanager
async def lifespan(app):
    setup_logging(log_level())
    yield


app = FastAPI(title="ATS Resume Builder", version=__version__, lifespan=lifespan)


# === Models ===

class JobDescriptionPayload(BaseModel):
    title: str = ""
    company: str = ""
    description: str = ""
    requirements: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class AnalyzeRequest(BaseModel):
    resume: Dict[str, Any] = Field(default_factory=dict)
    job_description: JobDescriptionPayload
    clamp_score: Optional[bool] = None


class ExportRequest(BaseModel):
    resume: Dict[str, Any] = Field(default_factory=dict)


# === Helpers ===

def _parse_resume(data: Dict[str, Any]) -> Resume:
    try:
        return Resume.from_dict(data)
    except ResumeFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _run_analysis(request: AnalyzeRequest):
    resume = _parse_resume(request.resume)
    job = JobDescription.from_dict(request.job_description.model_dump())
    try:
        job.validate()
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    config = ScoringConfig.from_env()
    if request.clamp_score is not None:
        config = config.with_clamp(request.clamp_score)

    return ATSAnalyzer(config).analyze(resume, job), job


def _content_disposition(filename: str) -> str:
    # Header values must be latin-1; non-ASCII names go in filename*
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _download(content: bytes, fmt: str, resume: Resume) -> Response:
    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": _content_disposition(export_filename(resume, fmt))},
    )


# === Routes ===

@app.get("/api/health")
async def health_check():
    return {
        "status": "healthy",
        "version": __version__,
        "pdflatex": pdflatex_available(),
        "export_formats": list(MEDIA_TYPES),
    }


@app.post("/api/analyze")
async def analyze_resume(request: AnalyzeRequest):
    """Score a resume against a job description."""
    analysis, _ = _run_analysis(request)
    return JSONResponse(analysis.to_dict())


@app.post("/api/report", response_class=PlainTextResponse)
async def analysis_report(request: AnalyzeRequest):
    """Markdown report of the analysis."""
    analysis, job = _run_analysis(request)
    return PlainTextResponse(render_report(analysis, job), media_type="text/markdown")


@app.post("/api/export/tex")
async def export_tex(request: ExportRequest):
    """Export resume as .tex file for manual compilation."""
    resume = _parse_resume(request.resume)
    latex = LatexResumeGenerator(resume).generate()
    return _download(latex.encode("utf-8"), "tex", resume)


@app.post("/api/export/txt")
async def export_txt(request: ExportRequest):
    """Export resume as plain text."""
    resume = _parse_resume(request.resume)
    text = PlainTextExporter(resume).generate()
    return _download(text.encode("utf-8"), "txt", resume)


@app.post("/api/export/docx")
async def export_docx(request: ExportRequest):
    """Export resume as an editable Word document."""
    resume = _parse_resume(request.resume)
    try:
        content = DocxExporter(resume).build()
    except ExportError as e:
        raise HTTPException(status_code=500, detail=f"{e}. Please try again.")
    return _download(content, "docx", resume)


@app.post("/api/export/pdf")
async def export_pdf(request: ExportRequest):
    """Export resume as PDF using pdflatex or the online compiler fallback."""
    resume = _parse_resume(request.resume)
    latex = LatexResumeGenerator(resume).generate()

    try:
        if pdflatex_available():
            content = compile_pdf(latex)
        else:
            content = await compile_pdf_online(latex)
    except ExportError as e:
        logger.error("PDF export failed: %s", e)
        raise HTTPException(status_code=500, detail=f"{e}. Please try again.")

    return _download(content, "pdf", resume)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
