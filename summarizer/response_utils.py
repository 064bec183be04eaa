"""
Gemini response parsing for the Blog Summarizer.

Gemini is asked for JSON but does not always return it: replies come wrapped
in Markdown code fences, prefixed with commentary, or as plain prose. These
parsers always return a best-effort structure and never raise.
"""

import json
import re
from typing import Dict, List, Optional

from .dictionary_utils import translate_to_urdu_static
from .text_utils import URDU_CHAR_CLASS, looks_like_list_item, strip_list_marker

CODE_FENCE_PATTERN = re.compile(r'```(?:json)?', re.IGNORECASE)
# Label plus Markdown decoration: "Summary:", "**Summary:**", "## Summary"
SUMMARY_LABEL_PATTERN = re.compile(r'^.*?summary[\s*_#:]*', re.IGNORECASE)
URDU_RUN_PATTERN = re.compile(f'[{URDU_CHAR_CLASS}]+[^\\n]*')


def strip_code_fences(text: str) -> str:
    """Remove ``` / ```json wrappers and surrounding whitespace."""
    if not text:
        return ''
    return CODE_FENCE_PATTERN.sub('', text).strip()


def _load_json_object(text: str) -> Optional[Dict]:
    try:
        parsed = json.loads(text)
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _is_summary_shape(parsed: Optional[Dict]) -> bool:
    return (
        parsed is not None
        and isinstance(parsed.get('summary'), str)
        and isinstance(parsed.get('keyPoints'), list)
    )


def _clean_key_points(points: List) -> List[str]:
    cleaned = []
    for point in points:
        if point is None:
            continue
        text = str(point).strip()
        if text:
            cleaned.append(text)
    return cleaned


def extract_summary_from_text(text: str) -> Dict:
    """
    Line-based fallback for replies that are not valid JSON.

    - First line mentioning "summary" becomes the summary (label stripped)
    - Lines starting with a bullet or number become key points
    - Without a summary line, the first 3 lines are joined instead

    Returns:
        Dict with summary (str) and key_points (list)
    """
    lines = [line.strip() for line in (text or '').split('\n') if line.strip()]

    summary = ''
    summary_pending = False
    key_points = []

    for line in lines:
        if looks_like_list_item(line):
            point = strip_list_marker(line)
            if point:
                key_points.append(point)
        elif not summary and 'summary' in line.lower():
            summary = SUMMARY_LABEL_PATTERN.sub('', line, count=1).strip()
            # "Summary:" on its own line, text follows on the next one
            summary_pending = not summary
        elif summary_pending:
            summary = line
            summary_pending = False

    if not summary and lines:
        summary = ' '.join(lines[:3])

    return {'summary': summary, 'key_points': key_points}


def parse_summary_response(raw_text: str) -> Dict:
    """
    Parse a summarize reply into summary and key points.

    Expects {"summary": "...", "keyPoints": ["...", ...]}, optionally inside a
    code fence. Anything else goes through extract_summary_from_text().

    Returns:
        Dict with summary (str) and key_points (list of str)
    """
    text = raw_text if isinstance(raw_text, str) else ''
    cleaned = strip_code_fences(text)
    parsed = _load_json_object(cleaned)

    if _is_summary_shape(parsed):
        return {
            'summary': parsed['summary'].strip(),
            'key_points': _clean_key_points(parsed['keyPoints']),
        }

    return extract_summary_from_text(cleaned)


def extract_urdu_runs(text: str) -> str:
    """Join every run of Urdu script (plus the rest of its line) with spaces."""
    matches = URDU_RUN_PATTERN.findall(text or '')
    return ' '.join(match.strip() for match in matches).strip()


def parse_combined_response(raw_text: str) -> Dict:
    """
    Parse a combined summary + translation reply.

    Expects {"summary", "keyPoints", "summaryUrdu"}. On the heuristic path
    the translation is every run of Urdu script found in the reply, or the
    dictionary translation of the extracted summary when there is none.

    Returns:
        Dict with summary, key_points and summary_urdu (None if the JSON
        reply had no usable summaryUrdu)
    """
    text = raw_text if isinstance(raw_text, str) else ''
    cleaned = strip_code_fences(text)
    parsed = _load_json_object(cleaned)

    if _is_summary_shape(parsed):
        summary_urdu = parsed.get('summaryUrdu')
        return {
            'summary': parsed['summary'].strip(),
            'key_points': _clean_key_points(parsed['keyPoints']),
            'summary_urdu': summary_urdu.strip() if isinstance(summary_urdu, str) else None,
        }

    basic = extract_summary_from_text(cleaned)
    summary_urdu = extract_urdu_runs(cleaned) or translate_to_urdu_static(basic['summary'])

    return {
        'summary': basic['summary'],
        'key_points': basic['key_points'],
        'summary_urdu': summary_urdu,
    }
