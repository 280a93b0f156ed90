"""
ATS Resume Builder

Scores a structured resume against a job description the way an
Applicant Tracking System screen would, suggests improvements, and
exports the resume as LaTeX, plain text, DOCX or PDF.
"""

from .models import (
    Resume, PersonalInfo, Experience, Education, Skill, SkillLevel, CustomSection, SectionKind,
    JobDescription, ATSAnalysis, SubScores, InvalidInputError, ResumeFormatError,
)
from .extractor import extract_keywords, KeywordExtractor, COMMON_PHRASES
from .matcher import match_keywords, KeywordMatcher, MatchResult
from .analyzer import analyze, ATSAnalyzer
from .config import ScoringConfig
from .generator import LatexResumeGenerator, PlainTextExporter, DocxExporter, ExportError
from .report import render_report
from .storage import ResumeStore, load_resume, save_resume

__version__ = "1.0.0"
__all__ = [
    "analyze",
    "extract_keywords",
    "match_keywords",
    "render_report",
    "load_resume",
    "save_resume",
    "ATSAnalyzer",
    "ATSAnalysis",
    "SubScores",
    "ScoringConfig",
    "KeywordExtractor",
    "KeywordMatcher",
    "MatchResult",
    "COMMON_PHRASES",
    "Resume",
    "PersonalInfo",
    "Experience",
    "Education",
    "Skill",
    "SkillLevel",
    "CustomSection",
    "SectionKind",
    "JobDescription",
    "InvalidInputError",
    "ResumeFormatError",
    "LatexResumeGenerator",
    "PlainTextExporter",
    "DocxExporter",
    "ExportError",
    "ResumeStore",
]
