"""
Summarization and translation pipeline.

Each capability is an ordered list of (name, strategy) pairs, best first:

    summarization: gemini -> extractive
    translation:   gemini -> dictionary

A strategy fails by raising or by returning None (output rejected). The last
strategy in each list has no external dependency and always succeeds, so the
pipeline itself never raises because of Gemini.
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

from .dictionary_utils import translate_to_urdu_static
from .extractive_utils import generate_static_summary
from .gemini_utils import AIUnavailableError, GeminiClient
from .quality_utils import is_blocking, validate_urdu_translation
from .rate_limit_utils import retry_with_backoff
from .response_utils import parse_combined_response, parse_summary_response
from .text_utils import clean_ai_translation, clean_text, count_words

MODE_COMBINED = 'combined'
MODE_SEPARATE = 'separate'
MODES = (MODE_COMBINED, MODE_SEPARATE)

AI_SUMMARY_FALLBACK_TEXT = 'Unable to generate summary'

TRANSLATION_ATTEMPTS = 2
TRANSLATION_BACKOFF_SECONDS = 1.0

Strategy = Tuple[str, Callable]


def run_strategies(strategies: List[Strategy], value):
    """
    Try each strategy in order and return (name, result) for the first that succeeds.

    Raises:
        RuntimeError: if every strategy failed
    """
    for name, strategy in strategies:
        try:
            result = strategy(value)
        except Exception as e:
            print(f"{name} strategy failed, trying next: {e}")
            continue

        if result is not None:
            return name, result

        print(f"{name} strategy output rejected, trying next")

    raise RuntimeError('No strategy produced a result')


def content_metrics(content: str) -> Dict:
    """Word and character counts of the cleaned content, shared by every summary path."""
    cleaned = clean_text(content)
    return {'word_count': count_words(cleaned), 'original_length': len(cleaned)}


def build_summary_result(summary: str, key_points: List[str], content: str) -> Dict:
    result = {
        'summary': summary or AI_SUMMARY_FALLBACK_TEXT,
        'key_points': list(key_points or []),
    }
    result.update(content_metrics(content))
    return result


def build_translation_result(original_text: str, translated_text: str, source: str) -> Dict:
    return {
        'original_text': original_text,
        'translated_text': translated_text,
        'language': 'urdu',
        'source': source,
    }


def accept_translation(original_text: str, translated_text: str) -> Optional[str]:
    """
    Validate a cleaned Gemini translation.

    Returns the translation, or None if it has no Urdu script at all.
    Non-blocking issues are printed as warnings.
    """
    validation = validate_urdu_translation(original_text, translated_text)

    if is_blocking(validation):
        print(f"Rejecting Gemini translation: {', '.join(validation['messages'])}")
        return None

    if not validation['is_valid']:
        print(f"Translation quality warning: {', '.join(validation['messages'])}")

    return translated_text


def summarize_with_fallback(content: str, client: Optional[GeminiClient] = None) -> Dict:
    """
    Summarize content with Gemini, falling back to the extractive summarizer.

    Malformed Gemini replies are handled by the response parser and do not
    trigger the fallback; only call failures do.

    Returns:
        SummaryResult dict (summary, key_points, word_count, original_length)
        plus source: 'gemini' or 'extractive'
    """
    def gemini_summary(text):
        parsed = parse_summary_response(client.summarize(text))
        return build_summary_result(parsed['summary'], parsed['key_points'], text)

    strategies = [('extractive', generate_static_summary)]
    if client is not None:
        strategies.insert(0, ('gemini', gemini_summary))

    source, result = run_strategies(strategies, content)
    result['source'] = source
    return result


def translate_with_fallback(text: str, client: Optional[GeminiClient] = None,
                            sleep: Callable = time.sleep) -> Dict:
    """
    Translate text to Urdu with Gemini, falling back to the dictionary.

    Gemini gets 2 attempts with exponential backoff (1s). Its reply is
    cleaned and validated; a reply without Urdu script is replaced by the
    dictionary translation.

    Returns:
        TranslationResult dict (original_text, translated_text, language)
        plus source: 'gemini' or 'dictionary'
    """
    def gemini_translation(value):
        raw = retry_with_backoff(
            lambda: client.translate(value),
            max_attempts=TRANSLATION_ATTEMPTS,
            base_delay=TRANSLATION_BACKOFF_SECONDS,
            sleep=sleep,
            label='Gemini translation'
        )
        return accept_translation(value, clean_ai_translation(raw))

    strategies = [('dictionary', translate_to_urdu_static)]
    if client is not None:
        strategies.insert(0, ('gemini', gemini_translation))

    source, translated = run_strategies(strategies, text)
    return build_translation_result(text, translated, source)


def summarize_and_translate(content: str, client: Optional[GeminiClient]) -> Dict:
    """
    Summary and Urdu translation from a single Gemini call.

    The translation is validated against the parsed English summary and
    replaced by the dictionary translation of that summary if it has no
    Urdu script.

    Raises:
        AIUnavailableError: if the Gemini call fails (not retried)

    Returns:
        Dict with summary (SummaryResult) and translation (TranslationResult)
    """
    if client is None:
        raise AIUnavailableError('Gemini client not configured')

    try:
        raw = client.summarize_and_translate(content)
    except AIUnavailableError:
        raise
    except Exception as e:
        raise AIUnavailableError(str(e)) from e

    parsed = parse_combined_response(raw)
    summary = build_summary_result(parsed['summary'], parsed['key_points'], content)
    summary['source'] = 'gemini'

    candidate = clean_ai_translation(parsed['summary_urdu'] or '')
    strategies = [
        ('gemini', lambda value: accept_translation(value, candidate)),
        ('dictionary', translate_to_urdu_static),
    ]
    source, translated = run_strategies(strategies, summary['summary'])

    return {
        'summary': summary,
        'translation': build_translation_result(summary['summary'], translated, source),
    }


def generate_summary_and_translation(content: str, client: Optional[GeminiClient] = None,
                                     mode: str = MODE_COMBINED,
                                     sleep: Callable = time.sleep) -> Dict:
    """
    Produce the summary and Urdu translation for a blog post.

    combined: one Gemini round trip; if that call fails, degrade to the
              separate path below.
    separate: summarize_with_fallback(), then translate_with_fallback()
              on the resulting summary.

    Returns:
        Dict with summary, translation and mode
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode}")

    if mode == MODE_COMBINED:
        try:
            result = summarize_and_translate(content, client)
            result['mode'] = mode
            return result
        except AIUnavailableError as e:
            print(f"Combined Gemini call failed, falling back to separate calls: {e}")

    summary = summarize_with_fallback(content, client)
    translation = translate_with_fallback(summary['summary'], client, sleep=sleep)

    return {'summary': summary, 'translation': translation, 'mode': mode}
