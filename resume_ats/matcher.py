"""
Keyword matcher.
Compares resume keywords against job description keywords.
"""

from dataclasses import dataclass, field
from typing import List, Sequence


MAX_MATCHED_DISPLAY = 15
MAX_MISSING = 10


def keywords_match(a: str, b: str) -> bool:
    """Fuzzy containment: equal, or either keyword is a substring of the other."""
    return a == b or a in b or b in a


@dataclass
class MatchResult:
    """Result of matching resume keywords to job keywords."""
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    job_keyword_count: int = 0
    max_matched_display: int = MAX_MATCHED_DISPLAY

    @property
    def display_matched(self) -> List[str]:
        """Matched keywords trimmed for presentation; density uses the full list."""
        return self.matched[:self.max_matched_display]


class KeywordMatcher:
    """Match resume keywords against job keywords with fuzzy containment.

    Containment over-matches on purpose: "manage" matches "management",
    and a short token like "api" matches anything that contains it.
    """

    def __init__(self, max_matched_display: int = MAX_MATCHED_DISPLAY, max_missing: int = MAX_MISSING):
        self.max_matched_display = max_matched_display
        self.max_missing = max_missing

    def match(self, resume_keywords: Sequence[str], job_keywords: Sequence[str]) -> MatchResult:
        job_set = set(job_keywords)
        resume_set = set(resume_keywords)

        matched = [
            keyword for keyword in resume_keywords
            if keyword in job_set or any(keywords_match(keyword, jk) for jk in job_keywords)
        ]
        missing = [
            keyword for keyword in job_keywords
            if keyword not in resume_set and not any(keywords_match(keyword, rk) for rk in resume_keywords)
        ]

        return MatchResult(
            matched=matched,
            missing=missing[:self.max_missing],
            job_keyword_count=len(job_keywords),
            max_matched_display=self.max_matched_display,
        )


def match_keywords(resume_keywords: Sequence[str], job_keywords: Sequence[str]) -> MatchResult:
    """Convenience function to match keywords with the default limits."""
    return KeywordMatcher().match(resume_keywords, job_keywords)
