"""
Markdown report for an ATS analysis.
"""

from typing import Optional

from .models import ATSAnalysis, JobDescription


def score_bar(score: float, cells: int = 10) -> str:
    """Render a score as a fixed-width bar; scores past 100 fill the bar."""
    filled = max(0, min(cells, int(score / (100 / cells))))
    return "█" * filled + "░" * (cells - filled)


class ReportGenerator:
    """Generate a markdown report for an analysis."""

    def __init__(self, analysis: ATSAnalysis, job_description: Optional[JobDescription] = None):
        self.analysis = analysis
        self.job = job_description

    def generate(self) -> str:
        analysis = self.analysis
        sub = analysis.sub_scores
        lines = ["# ATS Resume Report", ""]

        if self.job and (self.job.title or self.job.company):
            target = " at ".join(part for part in (self.job.title, self.job.company) if part)
            lines.append(f"**Target role:** {target}")
            lines.append("")

        lines.append(f"## ATS Score: {analysis.score}/100 ({analysis.rating})")
        lines.append("")
        lines.append(f"**Match Score:** [{score_bar(analysis.score)}] {analysis.score}")
        lines.append("")

        lines.append("## Breakdown")
        lines.append("")
        lines.append("| Component | Score |")
        lines.append("|---|---|")
        lines.append(f"| Keyword density | {sub.keyword_density:.1f}% |")
        lines.append(f"| Format | {sub.format_score} |")
        lines.append(f"| Length | {sub.length_score} |")
        lines.append(f"| Readability | {sub.readability_score} |")
        lines.append(f"| Structure | {analysis.structure_score} |")
        lines.append("")

        lines.append("## ✓ Matched Keywords")
        lines.append("")
        if analysis.matched_keywords:
            lines.append(", ".join(analysis.matched_keywords))
        else:
            lines.append("_No keywords matched_")
        lines.append("")

        lines.append("## ✗ Missing Keywords")
        lines.append("")
        if analysis.missing_keywords:
            lines.append(", ".join(analysis.missing_keywords))
        else:
            lines.append("_All keywords matched!_")
        lines.append("")

        if analysis.suggestions:
            lines.append("## Suggestions")
            lines.append("")
            for i, suggestion in enumerate(analysis.suggestions, 1):
                lines.append(f"{i}. {suggestion}")
            lines.append("")

        lines.append("---")
        lines.append("*Generated by ATS Resume Builder*")

        return "\n".join(lines)


def render_report(analysis: ATSAnalysis, job_description: Optional[JobDescription] = None) -> str:
    """Convenience function to render a markdown report."""
    return ReportGenerator(analysis, job_description).generate()
