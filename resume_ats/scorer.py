"""
Sub-scorers for the ATS analysis.
Each is a pure function of the resume or of its flattened text.
"""

import re
from typing import List

from .models import Resume


SENTENCE_SPLIT_PATTERN = re.compile(r'[.!?]+')

# (upper bound on word count, score); the sweet spot is 400-800 words
LENGTH_BANDS = ((200, 60), (400, 80), (800, 100), (1200, 90))
LENGTH_FALLBACK = 70

# (upper bound on average words per sentence, score)
READABILITY_BANDS = ((15, 100), (20, 90), (25, 80))
READABILITY_FALLBACK = 70

FORMAT_PENALTIES = {
    'experience': 20,
    'education': 10,
    'skills': 15,
    'email': 10,
    'phone': 5,
}

STRUCTURE_POINTS = {
    'full_name': 10,
    'summary': 15,
    'experience': 25,
    'education': 20,
    'skills': 20,
    'dates': 10,
}


def build_resume_text(resume: Resume) -> str:
    """Flatten the scored fields of a resume into one space-joined string."""
    info = resume.personal_info
    parts: List[str] = [info.full_name, info.summary]

    for exp in resume.experience:
        parts.extend([exp.company, exp.position, ' '.join(exp.description)])

    for edu in resume.education:
        parts.extend([edu.institution, edu.degree, edu.field])

    for skill in resume.skills:
        parts.extend([skill.name, skill.category])

    for section in resume.custom_sections:
        parts.extend([section.title, section.content])

    return ' '.join(parts)


def count_words(text: str) -> int:
    return len(text.split())


def count_sentences(text: str) -> int:
    """Number of segments between sentence terminators, trailing remainder included."""
    return len(SENTENCE_SPLIT_PATTERN.split(text))


def keyword_density(matched_count: int, job_keyword_count: int) -> float:
    """Percentage of job keywords matched; may exceed 100 with fuzzy matches."""
    return matched_count / max(job_keyword_count, 1) * 100


def format_score(resume: Resume) -> int:
    """Start at 100 and deduct for each missing essential section or contact field."""
    score = 100
    if not resume.experience:
        score -= FORMAT_PENALTIES['experience']
    if not resume.education:
        score -= FORMAT_PENALTIES['education']
    if not resume.skills:
        score -= FORMAT_PENALTIES['skills']
    if not resume.personal_info.email:
        score -= FORMAT_PENALTIES['email']
    if not resume.personal_info.phone:
        score -= FORMAT_PENALTIES['phone']
    return max(score, 0)


def length_score(text: str) -> int:
    word_count = count_words(text)
    for limit, score in LENGTH_BANDS:
        if word_count < limit:
            return score
    return LENGTH_FALLBACK


def readability_score(text: str) -> int:
    avg_words_per_sentence = count_words(text) / max(count_sentences(text), 1)
    for limit, score in READABILITY_BANDS:
        if avg_words_per_sentence < limit:
            return score
    return READABILITY_FALLBACK


def structure_score(resume: Resume) -> int:
    """Add points for each section present and for complete experience dates."""
    score = 0
    if resume.personal_info.full_name:
        score += STRUCTURE_POINTS['full_name']
    if resume.personal_info.summary:
        score += STRUCTURE_POINTS['summary']
    if resume.experience:
        score += STRUCTURE_POINTS['experience']
    if resume.education:
        score += STRUCTURE_POINTS['education']
    if resume.skills:
        score += STRUCTURE_POINTS['skills']

    # An empty resume scores 0, so no date points without experience entries
    if resume.experience and all(exp.has_proper_dates for exp in resume.experience):
        score += STRUCTURE_POINTS['dates']

    return score
