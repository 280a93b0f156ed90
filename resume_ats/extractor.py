"""
Keyword extractor.
Turns free text into candidate ATS keywords: single words plus known phrases.
"""

import re
from typing import Iterable, List


# Multi-word phrases ATS screens commonly look for
COMMON_PHRASES = (
    'project management', 'data analysis', 'customer service', 'team leadership',
    'strategic planning', 'budget management', 'process improvement', 'quality assurance',
    'software development', 'machine learning', 'data science', 'digital marketing',
    'social media', 'content marketing', 'sales management', 'business development',
)

# Anything that is not a word character, whitespace or hyphen becomes a separator
NON_WORD_PATTERN = r'[^\w\s-]'

MIN_WORD_LENGTH = 3


class KeywordExtractor:
    """Extract single-word and phrase keywords from text."""

    def __init__(self, phrases: Iterable[str] = COMMON_PHRASES):
        self.phrases = tuple(p.lower() for p in phrases)
        self.non_word_pattern = re.compile(NON_WORD_PATTERN)

    def extract(self, text: str) -> List[str]:
        """Return unique keywords in first-occurrence order, words before phrases."""
        if not text or not text.strip():
            return []

        text_lower = text.lower()
        words = self._extract_words(text_lower)
        phrases = self._extract_phrases(text_lower)

        # dict keeps insertion order, so results are stable across runs
        return list(dict.fromkeys(words + phrases))

    def _extract_words(self, text_lower: str) -> List[str]:
        """Split cleaned text into words, dropping very short tokens."""
        cleaned = self.non_word_pattern.sub(' ', text_lower)
        return [word for word in cleaned.split() if len(word) >= MIN_WORD_LENGTH]

    def _extract_phrases(self, text_lower: str) -> List[str]:
        """Find catalog phrases by plain substring containment on the raw text."""
        return [phrase for phrase in self.phrases if phrase in text_lower]


_default_extractor = KeywordExtractor()


def extract_keywords(text: str) -> List[str]:
    """Convenience function to extract keywords with the default phrase catalog."""
    return _default_extractor.extract(text)
