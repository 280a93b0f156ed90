"""
Resume exporters.
Renders a resume as LaTeX, plain text or DOCX, and compiles LaTeX to PDF.
"""

import io
import logging
import re
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from docx import Document
from docx.shared import Pt

from .config import latex_compiler_url
from .models import Resume, SectionKind

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("tex", "txt", "docx", "pdf")

MEDIA_TYPES = {
    "tex": "application/x-tex",
    "txt": "text/plain; charset=utf-8",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "pdf": "application/pdf",
}

PDFLATEX_TIMEOUT = 30

# Characters that need escaping in LaTeX text
LATEX_SPECIAL_CHARS = {
    '\\': r'\textbackslash{}',
    '&': r'\&',
    '%': r'\%',
    '$': r'\$',
    '#': r'\#',
    '_': r'\_',
    '{': r'\{',
    '}': r'\}',
    '~': r'\textasciitilde{}',
    '^': r'\textasciicircum{}',
}
LATEX_SPECIAL_PATTERN = re.compile('|'.join(re.escape(c) for c in LATEX_SPECIAL_CHARS))

# Path separators and characters Windows forbids in file names
UNSAFE_FILENAME_PATTERN = re.compile(r'[\\/:*?"<>|\r\n\t]+')


class ExportError(RuntimeError):
    """Rendering a resume failed; the user may retry."""


def export_filename(resume: Resume, extension: str) -> str:
    """File name for a download: the applicant's name, or 'resume'.

    The name never carries a directory part, so writing it under an
    output directory stays inside that directory.
    """
    name = UNSAFE_FILENAME_PATTERN.sub('_', resume.personal_info.full_name).strip(' .')
    return f"{name or 'resume'}.{extension}"


def escape_latex(text: str) -> str:
    """Escape special LaTeX characters."""
    if not text:
        return ""
    return LATEX_SPECIAL_PATTERN.sub(lambda m: LATEX_SPECIAL_CHARS[m.group(0)], text)


def contact_parts(resume: Resume) -> List[str]:
    info = resume.personal_info
    return [part for part in (info.email, info.phone, info.location, info.linkedin, info.website) if part]


def skill_category_label(category: str) -> str:
    return category.strip() or "Skills"


@dataclass
class SpacingConfig:
    """Configuration for document spacing."""
    section_spacing: str = "6pt"
    margin_top: str = "0.5in"
    margin_bottom: str = "0.5in"
    margin_left: str = "0.5in"
    margin_right: str = "0.5in"
    font_size: str = "10pt"


class LatexResumeGenerator:
    """Generate an ATS-friendly LaTeX document from a resume."""

    def __init__(self, resume: Resume, spacing: Optional[SpacingConfig] = None):
        self.resume = resume
        self.spacing = spacing or SpacingConfig()

    def generate(self) -> str:
        latex_parts = [self._generate_preamble()]
        latex_parts.append(r"\begin{document}")
        latex_parts.append("")
        latex_parts.append(self._generate_header())
        latex_parts.append("")

        for section in (
            self._generate_summary_section(),
            self._generate_experience_section(),
            self._generate_education_section(),
            self._generate_skills_section(),
            *self._generate_custom_sections(),
        ):
            if section:
                latex_parts.append(section)
                latex_parts.append("")

        latex_parts.append(r"\end{document}")
        return "\n".join(latex_parts)

    def _generate_preamble(self) -> str:
        """Generate document preamble."""
        return f"""\\documentclass[{self.spacing.font_size},letterpaper]{{article}}

\\usepackage[utf8]{{inputenc}}
\\usepackage[T1]{{fontenc}}
\\usepackage{{lmodern}}
\\usepackage[top={self.spacing.margin_top},bottom={self.spacing.margin_bottom},left={self.spacing.margin_left},right={self.spacing.margin_right}]{{geometry}}
\\usepackage{{enumitem}}
\\usepackage{{titlesec}}
\\usepackage{{hyperref}}

% ATS-friendly formatting
\\pagestyle{{empty}}
\\setlength{{\\parindent}}{{0pt}}
\\setlength{{\\parskip}}{{0pt}}

% Section formatting
\\titleformat{{\\section}}{{\\large\\bfseries}}{{}}{{0em}}{{}}[\\titlerule]
\\titlespacing*{{\\section}}{{0pt}}{{{self.spacing.section_spacing}}}{{{self.spacing.section_spacing}}}

% List formatting
\\setlist[itemize]{{noitemsep, topsep=0pt, parsep=0pt, partopsep=0pt, leftmargin=*}}
"""

    def _generate_header(self) -> str:
        lines = [r"\begin{center}"]
        name = self.resume.personal_info.full_name
        if name:
            lines.append(f"  {{\\LARGE \\textbf{{{escape_latex(name)}}}}} \\\\[2pt]")
        contacts = contact_parts(self.resume)
        if contacts:
            lines.append("  " + r" $|$ ".join(escape_latex(c) for c in contacts))
        lines.append(r"\end{center}")
        return "\n".join(lines)

    def _generate_summary_section(self) -> str:
        summary = self.resume.personal_info.summary
        if not summary:
            return ""
        return "\n".join([r"\section{Professional Summary}", escape_latex(summary)])

    def _generate_experience_section(self) -> str:
        if not self.resume.experience:
            return ""

        lines = [r"\section{Professional Experience}"]
        lines.append(r"\begin{itemize}[leftmargin=0.15in, label={}]")
        for exp in self.resume.experience:
            lines.append(r"  \item")
            lines.append(r"    \begin{tabular*}{\textwidth}[t]{l@{\extracolsep{\fill}}r}")
            lines.append(f"      \\textbf{{{escape_latex(exp.position)}}} & {escape_latex(exp.date_range)} \\\\")
            lines.append(f"      \\textit{{{escape_latex(exp.company)}}} & \\textit{{{escape_latex(exp.location)}}} \\\\")
            lines.append(r"    \end{tabular*}")

            bullets = [b for b in exp.description if b.strip()]
            if bullets:
                lines.append(r"    \begin{itemize}[leftmargin=0.2in]")
                lines.extend(f"      \\item {escape_latex(b)}" for b in bullets)
                lines.append(r"    \end{itemize}")
        lines.append(r"\end{itemize}")
        return "\n".join(lines)

    def _generate_education_section(self) -> str:
        if not self.resume.education:
            return ""

        lines = [r"\section{Education}"]
        lines.append(r"\begin{itemize}[leftmargin=0.15in, label={}]")
        for edu in self.resume.education:
            degree = edu.degree
            if edu.field:
                degree = f"{degree} in {edu.field}" if degree else edu.field
            details = [d for d in (f"GPA: {edu.gpa}" if edu.gpa else "", edu.honors or "") if d]

            lines.append(r"  \item")
            lines.append(r"    \begin{tabular*}{\textwidth}[t]{l@{\extracolsep{\fill}}r}")
            lines.append(f"      \\textbf{{{escape_latex(degree)}}} & {escape_latex(edu.date_range)} \\\\")
            lines.append(f"      \\textit{{{escape_latex(edu.institution)}}} & \\textit{{{escape_latex(', '.join(details))}}} \\\\")
            lines.append(r"    \end{tabular*}")
        lines.append(r"\end{itemize}")
        return "\n".join(lines)

    def _generate_skills_section(self) -> str:
        if not self.resume.skills:
            return ""

        lines = [r"\section{Skills}"]
        lines.append(r"\begin{itemize}[leftmargin=0.15in, label={}]")
        for category, skills in self.resume.skills_by_category().items():
            skills_str = ", ".join(skill.name for skill in skills)
            lines.append(
                f"  \\item \\textbf{{{escape_latex(skill_category_label(category))}}}: {escape_latex(skills_str)}"
            )
        lines.append(r"\end{itemize}")
        return "\n".join(lines)

    def _generate_custom_sections(self) -> List[str]:
        sections = []
        for section in self.resume.custom_sections:
            lines = [f"\\section{{{escape_latex(section.title)}}}"]
            if section.kind == SectionKind.LIST:
                lines.append(r"\begin{itemize}[leftmargin=0.2in]")
                lines.extend(f"  \\item {escape_latex(item)}" for item in section.items)
                lines.append(r"\end{itemize}")
            else:
                lines.append(escape_latex(section.content))
            sections.append("\n".join(lines))
        return sections


class PlainTextExporter:
    """Export a resume as plain text with '=== Section ===' headings."""

    def __init__(self, resume: Resume):
        self.resume = resume

    def generate(self) -> str:
        resume = self.resume
        info = resume.personal_info
        lines = []

        if info.full_name:
            lines.append(info.full_name)
        contacts = contact_parts(resume)
        if contacts:
            lines.append(" | ".join(contacts))

        if info.summary:
            lines.extend(["", "=== Professional Summary ===", info.summary])

        if resume.experience:
            lines.extend(["", "=== Professional Experience ==="])
            for exp in resume.experience:
                lines.append("")
                lines.append(f"{exp.position} | {exp.date_range}")
                lines.append(f"{exp.company} | {exp.location}")
                lines.extend(f"  - {b}" for b in exp.description if b.strip())

        if resume.education:
            lines.extend(["", "=== Education ==="])
            for edu in resume.education:
                lines.append("")
                lines.append(" in ".join(part for part in (edu.degree, edu.field) if part))
                lines.append(f"{edu.institution} | {edu.date_range}")
                if edu.gpa:
                    lines.append(f"GPA: {edu.gpa}")
                if edu.honors:
                    lines.append(edu.honors)

        if resume.skills:
            lines.extend(["", "=== Skills ==="])
            for category, skills in resume.skills_by_category().items():
                lines.append(f"{skill_category_label(category)}: {', '.join(s.name for s in skills)}")

        for section in resume.custom_sections:
            lines.extend(["", f"=== {section.title} ==="])
            if section.kind == SectionKind.LIST:
                lines.extend(f"  - {item}" for item in section.items)
            else:
                lines.append(section.content)

        return "\n".join(lines).strip() + "\n"


class DocxExporter:
    """Export a resume as an editable Word document."""

    def __init__(self, resume: Resume):
        self.resume = resume

    def build_document(self):
        resume = self.resume
        info = resume.personal_info
        doc = Document()

        doc.add_heading(info.full_name, level=0)
        self._paragraph(doc, f"{info.email} | {info.phone}", after=10)
        self._paragraph(doc, info.location, after=20)

        if info.summary:
            doc.add_heading("Professional Summary", level=1)
            self._paragraph(doc, info.summary, after=20)

        if resume.experience:
            doc.add_heading("Experience", level=1)
            for exp in resume.experience:
                p = doc.add_paragraph()
                p.add_run(exp.position).bold = True
                p.add_run(f" | {exp.company}")
                p.paragraph_format.space_after = Pt(5)

                end = "Present" if exp.current else exp.end_date
                self._paragraph(doc, f"{exp.start_date} - {end}", after=10)
                for bullet in exp.description:
                    self._paragraph(doc, f"• {bullet}", after=5)
                self._paragraph(doc, "", after=10)

        if resume.education:
            doc.add_heading("Education", level=1)
            for edu in resume.education:
                p = doc.add_paragraph()
                p.add_run(edu.degree).bold = True
                p.add_run(f" in {edu.field} | {edu.institution}")
                p.paragraph_format.space_after = Pt(10)

        if resume.skills:
            doc.add_heading("Skills", level=1)
            self._paragraph(doc, ", ".join(skill.name for skill in resume.skills), after=10)

        return doc

    def build(self) -> bytes:
        try:
            buffer = io.BytesIO()
            self.build_document().save(buffer)
        except Exception as e:
            logger.exception("Error exporting to DOCX")
            raise ExportError("Failed to export DOCX") from e
        return buffer.getvalue()

    @staticmethod
    def _paragraph(doc, text: str, after: int):
        p = doc.add_paragraph(text)
        p.paragraph_format.space_after = Pt(after)
        return p


def pdflatex_available() -> bool:
    return shutil.which("pdflatex") is not None


def compile_pdf(latex_content: str) -> bytes:
    """Compile LaTeX to PDF with a local pdflatex."""
    if not pdflatex_available():
        raise ExportError("pdflatex not found")

    with tempfile.TemporaryDirectory() as tmpdir:
        tex_path = Path(tmpdir) / "resume.tex"
        pdf_path = Path(tmpdir) / "resume.pdf"
        tex_path.write_text(latex_content, encoding="utf-8")

        try:
            result = subprocess.run(
                ["pdflatex", "-interaction=nonstopmode", "-output-directory", tmpdir, str(tex_path)],
                capture_output=True,
                text=True,
                timeout=PDFLATEX_TIMEOUT,
            )
        except subprocess.TimeoutExpired as e:
            raise ExportError("LaTeX compilation timed out") from e

        if not pdf_path.exists():
            logger.error("pdflatex failed: %s", (result.stdout or result.stderr)[-500:])
            raise ExportError(f"LaTeX compilation failed: {result.stderr[:500]}")

        return pdf_path.read_bytes()


async def compile_pdf_online(latex_content: str, url: Optional[str] = None) -> bytes:
    """Compile LaTeX to PDF with the online compiler service."""
    import httpx

    try:
        async with httpx.AsyncClient(timeout=60.0) as client:
            response = await client.post(
                url or latex_compiler_url(),
                json={
                    "compiler": "pdflatex",
                    "resources": [{"main": True, "content": latex_content}],
                },
            )
    except httpx.TimeoutException as e:
        raise ExportError("Online LaTeX compilation timed out") from e
    except httpx.HTTPError as e:
        raise ExportError(f"Online LaTeX compilation failed: {e}") from e

    if response.status_code not in (200, 201):
        error_msg = response.text[:500] if response.text else "Unknown error"
        raise ExportError(f"Online LaTeX compilation failed: {error_msg}")

    return response.content


def render(resume: Resume, fmt: str) -> bytes:
    """Render a resume in an export format; pdf needs a local pdflatex."""
    if fmt == "tex":
        return LatexResumeGenerator(resume).generate().encode("utf-8")
    if fmt == "txt":
        return PlainTextExporter(resume).generate().encode("utf-8")
    if fmt == "docx":
        return DocxExporter(resume).build()
    if fmt == "pdf":
        return compile_pdf(LatexResumeGenerator(resume).generate())
    raise ValueError(f"Unknown export format: {fmt}")
