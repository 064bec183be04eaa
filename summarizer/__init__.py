"""Shared utilities for the Blog Summarizer."""

from .text_utils import (
    clean_text,
    count_words,
    is_right_to_left_script,
    looks_like_list_item,
    clean_ai_translation,
    post_process_urdu_translation,
)

from .extractive_utils import (
    FALLBACK_SUMMARY_TEXT,
    generate_static_summary,
)

from .dictionary_utils import (
    ENGLISH_TO_URDU,
    translate_to_urdu_static,
)

from .response_utils import (
    parse_summary_response,
    parse_combined_response,
)

from .quality_utils import (
    ISSUE_NO_SCRIPT,
    ISSUE_TOO_SHORT,
    ISSUE_TOO_ENGLISH,
    validate_urdu_translation,
)

from .rate_limit_utils import (
    RateLimiter,
    RateLimiterRegistry,
    retry_with_backoff,
)

from .gemini_utils import (
    AIUnavailableError,
    GeminiClient,
)

from .pipeline_utils import (
    MODE_COMBINED,
    MODE_SEPARATE,
    summarize_with_fallback,
    translate_with_fallback,
    summarize_and_translate,
    generate_summary_and_translation,
)

__all__ = [
    # Text utilities
    'clean_text',
    'count_words',
    'is_right_to_left_script',
    'looks_like_list_item',
    'clean_ai_translation',
    'post_process_urdu_translation',
    # Fallback summarizer / translator
    'FALLBACK_SUMMARY_TEXT',
    'generate_static_summary',
    'ENGLISH_TO_URDU',
    'translate_to_urdu_static',
    # Gemini response handling
    'parse_summary_response',
    'parse_combined_response',
    'ISSUE_NO_SCRIPT',
    'ISSUE_TOO_SHORT',
    'ISSUE_TOO_ENGLISH',
    'validate_urdu_translation',
    # Gemini calls
    'RateLimiter',
    'RateLimiterRegistry',
    'retry_with_backoff',
    'AIUnavailableError',
    'GeminiClient',
    # Pipeline
    'MODE_COMBINED',
    'MODE_SEPARATE',
    'summarize_with_fallback',
    'translate_with_fallback',
    'summarize_and_translate',
    'generate_summary_and_translation',
]
