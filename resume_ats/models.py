"""
Resume and job description data model.
Structured records exchanged between the editor, the scorer and the exporters.
"""

import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import TRUE_VALUES


class InvalidInputError(ValueError):
    """Raised when a caller hands the scorer input it must never see."""


class ResumeFormatError(ValueError):
    """Raised when serialized resume data has the wrong shape."""


class SkillLevel(Enum):
    """Self-assessed proficiency of a skill."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

    @classmethod
    def parse(cls, value: Any) -> "SkillLevel":
        if isinstance(value, cls):
            return value
        for level in cls:
            if str(value).strip().lower() == level.value.lower():
                return level
        return cls.INTERMEDIATE


class SectionKind(Enum):
    """How a custom section body is laid out."""
    TEXT = "text"
    LIST = "list"


def new_id() -> str:
    """Return a fresh identifier for an editable resume entry."""
    return uuid.uuid4().hex


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _flag(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


def _optional_text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


def _list_of(data: Dict[str, Any], key: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ResumeFormatError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _mapping(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ResumeFormatError(f"'{name}' must be an object, got {type(value).__name__}")
    return value


@dataclass
class PersonalInfo:
    """Contact details and the professional summary."""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""
    summary: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PersonalInfo":
        data = _mapping(data, "personalInfo")
        return cls(
            full_name=_text(data, "fullName"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            location=_text(data, "location"),
            linkedin=_text(data, "linkedin"),
            website=_text(data, "website"),
            summary=_text(data, "summary"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
            "linkedin": self.linkedin,
            "website": self.website,
            "summary": self.summary,
        }


@dataclass
class Experience:
    """A work experience entry."""
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def has_proper_dates(self) -> bool:
        """A start date and either an end date or the 'current' flag."""
        return bool(self.start_date) and (bool(self.end_date) or self.current)

    @property
    def date_range(self) -> str:
        end = "Present" if self.current else self.end_date
        if self.start_date and end:
            return f"{self.start_date} - {end}"
        return self.start_date or end

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        data = _mapping(data, "experience")
        return cls(
            id=_text(data, "id") or new_id(),
            company=_text(data, "company"),
            position=_text(data, "position"),
            location=_text(data, "location"),
            start_date=_text(data, "startDate"),
            end_date=_text(data, "endDate"),
            current=_flag(data, "current"),
            description=[str(item) for item in _list_of(data, "description")],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "company": self.company,
            "position": self.position,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "current": self.current,
            "description": list(self.description),
        }


@dataclass
class Education:
    """An education entry."""
    # declared before `field` so the dataclasses helper is not shadowed
    id: str = field(default_factory=new_id)
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: Optional[str] = None
    honors: Optional[str] = None

    @property
    def date_range(self) -> str:
        if self.start_date and self.end_date:
            return f"{self.start_date} - {self.end_date}"
        return self.start_date or self.end_date

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        data = _mapping(data, "education")
        return cls(
            id=_text(data, "id") or new_id(),
            institution=_text(data, "institution"),
            degree=_text(data, "degree"),
            field=_text(data, "field"),
            start_date=_text(data, "startDate"),
            end_date=_text(data, "endDate"),
            gpa=_optional_text(data, "gpa"),
            honors=_optional_text(data, "honors"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "institution": self.institution,
            "degree": self.degree,
            "field": self.field,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }
        if self.gpa is not None:
            data["gpa"] = self.gpa
        if self.honors is not None:
            data["honors"] = self.honors
        return data


@dataclass
class Skill:
    """A named skill; the category only groups skills for display."""
    name: str = ""
    level: SkillLevel = SkillLevel.INTERMEDIATE
    category: str = ""
    id: str = field(default_factory=new_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Skill":
        data = _mapping(data, "skills")
        return cls(
            id=_text(data, "id") or new_id(),
            name=_text(data, "name"),
            level=SkillLevel.parse(data.get("level", SkillLevel.INTERMEDIATE.value)),
            category=_text(data, "category"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level.value,
            "category": self.category,
        }


@dataclass
class CustomSection:
    """A free-form section such as Projects or Certifications."""
    title: str = ""
    content: str = ""
    kind: SectionKind = SectionKind.TEXT
    id: str = field(default_factory=new_id)

    @property
    def items(self) -> List[str]:
        """Non-empty lines of a list section."""
        return [line.strip() for line in self.content.split("\n") if line.strip()]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomSection":
        data = _mapping(data, "customSections")
        kind = SectionKind.LIST if data.get("type") == SectionKind.LIST.value else SectionKind.TEXT
        return cls(
            id=_text(data, "id") or new_id(),
            title=_text(data, "title"),
            content=_text(data, "content"),
            kind=kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "type": self.kind.value,
        }


@dataclass
class Resume:
    """Complete resume as edited by the applicant."""
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    custom_sections: List[CustomSection] = field(default_factory=list)

    def skills_by_category(self) -> Dict[str, List[Skill]]:
        """Group skills by category, keeping first-seen category order."""
        groups: Dict[str, List[Skill]] = {}
        for skill in self.skills:
            groups.setdefault(skill.category, []).append(skill)
        return groups

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resume":
        if not isinstance(data, dict):
            raise ResumeFormatError(f"Resume must be a JSON object, got {type(data).__name__}")
        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personalInfo")),
            experience=[Experience.from_dict(item) for item in _list_of(data, "experience")],
            education=[Education.from_dict(item) for item in _list_of(data, "education")],
            skills=[Skill.from_dict(item) for item in _list_of(data, "skills")],
            custom_sections=[CustomSection.from_dict(item) for item in _list_of(data, "customSections")],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personalInfo": self.personal_info.to_dict(),
            "experience": [exp.to_dict() for exp in self.experience],
            "education": [edu.to_dict() for edu in self.education],
            "skills": [skill.to_dict() for skill in self.skills],
            "customSections": [section.to_dict() for section in self.custom_sections],
        }


@dataclass
class JobDescription:
    """A job posting; only the description text is scored."""
    description: str = ""
    title: str = ""
    company: str = ""
    # Carried for clients, not read by the scorer
    requirements: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)

    def validate(self) -> "JobDescription":
        """Refuse an empty description before it reaches the scorer."""
        if not self.description or not self.description.strip():
            raise InvalidInputError("Job description must not be empty")
        return self

    @classmethod
    def from_text(cls, text: str, title: str = "", company: str = "") -> "JobDescription":
        """Build a job description from pasted posting text.

        Title and company fall back to what the first lines of the paste
        suggest, then to generic placeholders.
        """
        guessed_title, guessed_company = guess_title_and_company(text)
        return cls(
            description=text.strip(),
            title=title or guessed_title or "Job Title",
            company=company or guessed_company or "Company",
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobDescription":
        data = _mapping(data, "jobDescription")
        return cls(
            description=_text(data, "description"),
            title=_text(data, "title"),
            company=_text(data, "company"),
            requirements=[str(item) for item in _list_of(data, "requirements")],
            keywords=[str(item) for item in _list_of(data, "keywords")],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "company": self.company,
            "description": self.description,
            "requirements": list(self.requirements),
            "keywords": list(self.keywords),
        }


def guess_title_and_company(text: str):
    """Guess (title, company) from the first lines of a pasted posting."""
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    title = lines[0] if lines else ""
    company = ""
    if len(lines) > 1:
        company_line = next((line for line in lines if "at " in line.lower()), lines[1])
        match = re.search(r'at\s+(.+)', company_line, re.IGNORECASE)
        company = match.group(1).strip() if match else company_line
    return title, company


@dataclass(frozen=True)
class SubScores:
    """Component scores shown next to the overall ATS score."""
    keyword_density: float
    format_score: int
    length_score: int
    readability_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keywordDensity": self.keyword_density,
            "formatScore": self.format_score,
            "lengthScore": self.length_score,
            "readabilityScore": self.readability_score,
        }


@dataclass(frozen=True)
class ATSAnalysis:
    """Result of scoring a resume against a job description."""
    score: int
    matched_keywords: List[str]
    missing_keywords: List[str]
    suggestions: List[str]
    sub_scores: SubScores
    structure_score: int = 0

    @property
    def rating(self) -> str:
        if self.score >= 80:
            return "excellent"
        if self.score >= 60:
            return "good"
        return "needs improvement"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "rating": self.rating,
            "matchedKeywords": list(self.matched_keywords),
            "missingKeywords": list(self.missing_keywords),
            "suggestions": list(self.suggestions),
            "analysis": self.sub_scores.to_dict(),
            "structureScore": self.structure_score,
        }
