"""
Text cleanup utilities for the Blog Summarizer.

Covers two jobs:
1. Normalizing scraped English text before any analysis
2. Cleaning up Urdu text returned by Gemini before it is validated
"""

import re

# Arabic-script blocks used for Urdu text
URDU_CHAR_CLASS = "\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF"
URDU_CHAR_PATTERN = re.compile(f'[{URDU_CHAR_CLASS}]')

# "1." / "1)" or a bullet glyph followed by whitespace at the start of a line.
# "**Summary:**" is Markdown bold, not a bullet.
LIST_MARKER_PATTERN = re.compile(r'^\s*(?:\d+[.)]\s*|[•·\-*]\s+)')

# Preambles the model likes to put in front of a translation
TRANSLATION_PREAMBLES = [
    'Urdu translation:',
    'Translation:',
    'اردو ترجمہ:',
    'یہ اردو ترجمہ ہے:',
    'ترجمہ:',
]

# Urdu full stop, Urdu question mark, exclamation mark
URDU_SENTENCE_PUNCTUATION = '۔؟!'


def clean_text(text: str) -> str:
    """
    Normalize raw scraped text.

    - Collapses whitespace runs to a single space
    - Drops everything except word characters, whitespace and . , ! ? ; : ( )
    - Trims both ends

    Examples:
        >>> clean_text("  Hello,   world!  ")
        'Hello, world!'

        >>> clean_text("Price: $20 -- \\"today\\"")
        'Price: 20 today'
    """
    if not text:
        return ''

    text = re.sub(r'\s+', ' ', text)
    text = re.sub(r'[^\w\s.,!?;:()]', '', text)
    return re.sub(r'\s+', ' ', text).strip()


def count_words(text: str) -> int:
    """Count whitespace-separated words (0 for empty text)."""
    if not text:
        return 0
    return len(text.split())


def is_right_to_left_script(text: str) -> bool:
    """Check if text contains at least one Urdu/Arabic script character."""
    if not text:
        return False
    return URDU_CHAR_PATTERN.search(text) is not None


def looks_like_list_item(line: str) -> bool:
    """Check if a line starts with a bullet glyph or a number marker."""
    if not line:
        return False
    return LIST_MARKER_PATTERN.match(line) is not None


def strip_list_marker(line: str) -> str:
    """Remove a leading bullet/number marker from a line."""
    return LIST_MARKER_PATTERN.sub('', line, count=1).strip()


def extract_urdu_text(text: str) -> str:
    """
    Keep only the lines that contain Urdu script.

    Models sometimes wrap a translation in English commentary. If no line
    contains Urdu the text is returned unchanged.
    """
    if not text:
        return ''

    urdu_lines = [line for line in text.split('\n') if is_right_to_left_script(line)]
    if urdu_lines:
        return '\n'.join(urdu_lines).strip()

    return text


def normalize_urdu_text(text: str) -> str:
    """Collapse whitespace, drop surrounding quotes and known translation preambles."""
    if not text:
        return ''

    text = re.sub(r'\s+', ' ', text.strip())
    text = re.sub(r'^\s*["“”]|["“”]\s*$', '', text).strip()

    for preamble in TRANSLATION_PREAMBLES:
        if text.lower().startswith(preamble.lower()):
            text = text[len(preamble):]
            break

    return text.strip()


def post_process_urdu_translation(text: str) -> str:
    """
    Tidy an Urdu translation for display and storage.

    - Normalizes whitespace and strips preambles
    - Re-attaches diacritics and Urdu punctuation that the model spaced apart
    - Puts exactly one space after ۔ ؟ !
    """
    processed = normalize_urdu_text(text)

    # Diacritics (zabar, zer, pesh, ...) split away from their letter
    processed = re.sub(r'([\u0600-\u06FF])\s+([\u064B-\u065F\u0670])', r'\1\2', processed)

    # Space before Urdu full stop / question mark / comma
    processed = re.sub(r'(?<=[\u0600-\u06FF])\s+([\u06D4\u061F\u060C])', r'\1', processed)

    processed = re.sub(
        f'([{URDU_SENTENCE_PUNCTUATION}])\\s*(?=[^\\s{URDU_SENTENCE_PUNCTUATION}])',
        r'\1 ',
        processed
    )

    return processed.strip()


def clean_ai_translation(text: str) -> str:
    """Full cleanup applied to every Gemini translation before validation."""
    return post_process_urdu_translation(extract_urdu_text(text or ''))
