"""
ATS analyzer.
Scores a resume against a job description and suggests improvements.
"""

import logging
import math
from typing import List, Optional

from .config import ScoringConfig
from .extractor import KeywordExtractor
from .matcher import KeywordMatcher, MatchResult
from .models import ATSAnalysis, JobDescription, Resume, SubScores
from .scorer import (
    build_resume_text,
    format_score,
    keyword_density,
    length_score,
    readability_score,
    structure_score,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 upwards; round() would round halves to even."""
    return int(math.floor(value + 0.5))


class ATSAnalyzer:
    """Score resumes against job descriptions.

    The analyzer holds only read-only configuration, so one instance can
    serve any number of callers.
    """

    def __init__(self, config: Optional[ScoringConfig] = None, extractor: Optional[KeywordExtractor] = None):
        self.config = config or ScoringConfig()
        self.extractor = extractor or KeywordExtractor()
        self.matcher = KeywordMatcher(
            max_matched_display=self.config.max_matched_keywords,
            max_missing=self.config.max_missing_keywords,
        )

    def analyze(self, resume: Resume, job_description: JobDescription) -> ATSAnalysis:
        """Perform full ATS analysis."""
        resume_text = build_resume_text(resume)
        resume_keywords = self.extractor.extract(resume_text)
        job_keywords = self.extractor.extract(job_description.description)

        match = self.matcher.match(resume_keywords, job_keywords)

        sub_scores = SubScores(
            keyword_density=keyword_density(len(match.matched), len(job_keywords)),
            format_score=format_score(resume),
            length_score=length_score(resume_text),
            readability_score=readability_score(resume_text),
        )
        structure = structure_score(resume)
        score = self._calculate_score(sub_scores, structure)

        logger.debug(
            "Scored resume: %d resume keywords, %d job keywords, %d matched, score %d",
            len(resume_keywords), len(job_keywords), len(match.matched), score,
        )

        return ATSAnalysis(
            score=score,
            matched_keywords=match.display_matched,
            missing_keywords=match.missing,
            suggestions=self._generate_suggestions(resume, match),
            sub_scores=sub_scores,
            structure_score=structure,
        )

    def _calculate_score(self, sub_scores: SubScores, structure: int) -> int:
        """Weighted sum of the sub-scores."""
        raw = (
            sub_scores.keyword_density * self.config.keyword_weight
            + sub_scores.format_score * self.config.format_weight
            + sub_scores.length_score * self.config.length_weight
            + structure * self.config.structure_weight
        )
        score = round_half_up(raw)
        if self.config.clamp_score:
            score = min(max(score, 0), 100)
        return score

    def _generate_suggestions(self, resume: Resume, match: MatchResult) -> List[str]:
        """Generate suggestions in a fixed order, independent of the score."""
        suggestions = []
        config = self.config

        if len(match.matched) < config.min_matched_keywords:
            suggestions.append("Add more relevant keywords from the job description to your resume")

        if match.missing:
            suggestions.append(
                f"Consider adding these keywords: {', '.join(match.missing[:config.suggested_keywords])}"
            )

        if len(resume.personal_info.summary) < config.min_summary_length:
            suggestions.append("Expand your professional summary to 2-3 sentences")

        if any(len(exp.description) < config.min_bullets for exp in resume.experience):
            suggestions.append("Add more bullet points to your work experience descriptions")

        if len(resume.skills) < config.min_skills:
            suggestions.append("Add more relevant skills to strengthen your profile")

        return suggestions


def analyze(resume: Resume, job_description: JobDescription, config: Optional[ScoringConfig] = None) -> ATSAnalysis:
    """Convenience function to score a resume against a job description."""
    return ATSAnalyzer(config).analyze(resume, job_description)
