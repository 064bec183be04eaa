"""
Extractive summarizer for the Blog Summarizer.

Used whenever Gemini is unavailable. Sentences are lifted verbatim from the
cleaned content, scored with a small additive heuristic and returned in their
original order. Never raises: empty input produces a well-formed result with
the fallback summary text.
"""

import math
import re
from typing import Dict, List

from .text_utils import clean_text, count_words

FALLBACK_SUMMARY_TEXT = 'Unable to generate summary from the provided content.'

MIN_SENTENCE_LENGTH = 10
MAX_SUMMARY_SENTENCES = 5
SUMMARY_RATIO = 0.3
MAX_KEY_POINTS = 5

# Words that usually mark a sentence worth keeping
IMPORTANT_WORDS = [
    'important', 'significant', 'key', 'main', 'primary', 'essential',
    'crucial', 'major', 'fundamental', 'critical', 'vital', 'necessary',
    'therefore', 'however', 'moreover', 'furthermore', 'consequently',
    'result', 'conclusion', 'summary', 'findings', 'discovered',
    'research', 'study', 'analysis', 'data', 'evidence', 'shows',
    'reveals', 'indicates', 'suggests', 'demonstrates', 'proves',
]

KEY_POINT_WORDS = ['key', 'important', 'main', 'significant', 'essential', 'crucial']

# clean_text() drops bullet glyphs, so numbered items are the only list markers left
NUMBERED_ITEM_PATTERN = re.compile(r'\d+[.)]\s*([^\d\n]+)')


def split_sentences(text: str) -> List[str]:
    """Split cleaned text into sentence candidates, dropping fragments under 10 chars."""
    if not text:
        return []

    candidates = (s.strip() for s in re.split(r'[.!?]+', text))
    return [s for s in candidates if len(s) >= MIN_SENTENCE_LENGTH]


def score_sentence(sentence: str, index: int, total: int) -> int:
    """
    Score a sentence candidate.

    Args:
        sentence: The sentence text
        index: Position among all candidates (0-based)
        total: Number of candidates

    Returns:
        Additive score; higher means more likely to be picked
    """
    score = 0

    # Lead and conclusion bias
    if index < total * 0.2:
        score += 3
    if index >= total * 0.8:
        score += 2

    if 8 <= len(sentence.split()) <= 25:
        score += 2

    lower_sentence = sentence.lower()
    for word in IMPORTANT_WORDS:
        if word in lower_sentence:
            score += 1

    # Number-heavy or bracket-heavy sentences read badly out of context
    if len(re.findall(r'\d+', sentence)) > 3:
        score -= 1
    if len(re.findall(r'[()\[\]{}]', sentence)) > 2:
        score -= 1

    return score


def select_top_sentences(sentences: List[str]) -> List[str]:
    """Pick the best-scoring sentences and return them in narrative order."""
    total = len(sentences)
    if total == 0:
        return []

    scored = [
        {'sentence': sentence, 'score': score_sentence(sentence, index, total), 'index': index}
        for index, sentence in enumerate(sentences)
    ]

    limit = min(MAX_SUMMARY_SENTENCES, math.ceil(total * SUMMARY_RATIO))
    # sorted() is stable, so ties keep their original order
    top = sorted(scored, key=lambda item: item['score'], reverse=True)[:limit]
    top.sort(key=lambda item: item['index'])

    return [item['sentence'] for item in top]


def join_summary(sentences: List[str]) -> str:
    """Join sentences into a summary ending in exactly one period."""
    if not sentences:
        return ''

    summary = '. '.join(sentences)
    summary = re.sub(r'\.\s*\.', '.', summary)
    return summary.rstrip(' .') + '.'


def extract_key_points(content: str, sentences: List[str]) -> List[str]:
    """
    Extract up to 5 key points.

    Order of preference:
    1. Numbered list items in the cleaned content (10 < length < 150)
    2. Sentences mentioning key/important/main/... (max 3)
    3. The first 3 sentence candidates
    """
    key_points = []

    for match in NUMBERED_ITEM_PATTERN.finditer(content or ''):
        point = match.group(1).strip()
        if 10 < len(point) < 150:
            key_points.append(point)

    if not key_points:
        keyword_sentences = [
            sentence for sentence in sentences
            if any(word in sentence.lower() for word in KEY_POINT_WORDS)
        ]
        key_points.extend(keyword_sentences[:3])

    if not key_points:
        key_points.extend(sentences[:3])

    return key_points[:MAX_KEY_POINTS]


def generate_static_summary(content: str) -> Dict:
    """
    Summarize content without any AI dependency.

    Args:
        content: Raw scraped text

    Returns:
        Dict with:
            summary: str - Selected sentences joined in original order
            key_points: list - Up to 5 key points
            word_count: int - Words in the cleaned content
            original_length: int - Characters in the cleaned content
    """
    cleaned = clean_text(content)
    sentences = split_sentences(cleaned)

    summary = join_summary(select_top_sentences(sentences))
    key_points = extract_key_points(cleaned, sentences) if summary else []

    return {
        'summary': summary or FALLBACK_SUMMARY_TEXT,
        'key_points': key_points,
        'word_count': count_words(cleaned),
        'original_length': len(cleaned),
    }
