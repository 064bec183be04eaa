"""
Translation quality checks for Urdu output.

All checks run independently and their issues accumulate. Only NO_SCRIPT is
blocking: callers replace the translation with the dictionary fallback. The
other issues are reported as warnings and the translation is kept.
"""

import re
from typing import Dict, List

from .text_utils import count_words, is_right_to_left_script

ISSUE_NO_SCRIPT = 'NO_SCRIPT'
ISSUE_TOO_SHORT = 'TOO_SHORT'
ISSUE_TOO_ENGLISH = 'TOO_ENGLISH'

ISSUE_MESSAGES = {
    ISSUE_NO_SCRIPT: 'Translation does not contain Urdu script',
    ISSUE_TOO_SHORT: 'Translation seems too short',
    ISSUE_TOO_ENGLISH: 'Translation contains too many English words',
}

BLOCKING_ISSUES = {ISSUE_NO_SCRIPT}

MIN_LENGTH_RATIO = 0.3
MAX_ENGLISH_RATIO = 0.7


def validate_urdu_translation(original_text: str, translated_text: str) -> Dict:
    """
    Validate an Urdu translation against its English source.

    Args:
        original_text: English source text
        translated_text: Candidate Urdu translation

    Returns:
        Dict with:
            is_valid: bool - True if no issue was raised
            issues: list - Issue codes (NO_SCRIPT, TOO_SHORT, TOO_ENGLISH)
            messages: list - Human-readable message per issue
    """
    original_text = original_text or ''
    translated_text = translated_text or ''
    issues: List[str] = []

    if not is_right_to_left_script(translated_text):
        issues.append(ISSUE_NO_SCRIPT)

    if len(translated_text) < len(original_text) * MIN_LENGTH_RATIO:
        issues.append(ISSUE_TOO_SHORT)

    english_words = re.findall(r'[a-zA-Z]+', translated_text)
    if len(english_words) > count_words(original_text) * MAX_ENGLISH_RATIO:
        issues.append(ISSUE_TOO_ENGLISH)

    return {
        'is_valid': not issues,
        'issues': issues,
        'messages': [ISSUE_MESSAGES[issue] for issue in issues],
    }


def is_blocking(validation: Dict) -> bool:
    """True if the validation result requires falling back to the dictionary."""
    return any(issue in BLOCKING_ISSUES for issue in validation.get('issues', []))
