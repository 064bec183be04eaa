"""
Shared pytest fixtures for Blog Summarizer tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path
from unittest.mock import MagicMock

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module with a unique name at module load time
_blog_summarizer_module = _load_module_from_path(
    'blog_summarizer_main',
    PROJECT_ROOT / 'blog-summarizer' / 'main.py'
)


# ============================================================================
# Cloud Function Fixtures
# ============================================================================

@pytest.fixture
def blog_summarizer_module():
    """Returns the loaded blog-summarizer main module."""
    return _blog_summarizer_module


@pytest.fixture
def summarize_blog():
    """Returns summarize_blog entry point."""
    return _blog_summarizer_module.summarize_blog


@pytest.fixture
def translate_urdu():
    """Returns translate_urdu entry point."""
    return _blog_summarizer_module.translate_urdu


@pytest.fixture
def health_check():
    """Returns health_check entry point."""
    return _blog_summarizer_module.health_check


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST', args=None):
            self._json = json_data
            self.method = method
            self.args = args or {}
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


# ============================================================================
# Gemini Fixtures
# ============================================================================

@pytest.fixture
def fake_gemini():
    """MagicMock standing in for GeminiClient; set return values per test."""
    client = MagicMock()
    client.summarize.return_value = '{"summary": "AI summary.", "keyPoints": ["one", "two"]}'
    client.translate.return_value = 'ٹیکنالوجی دنیا کو بدل رہی ہے۔'
    client.summarize_and_translate.return_value = (
        '{"summary": "AI summary.", "keyPoints": ["one"], "summaryUrdu": "اے آئی خلاصہ۔"}'
    )
    return client


@pytest.fixture
def failing_gemini():
    """Gemini client whose every call raises AIUnavailableError."""
    from summarizer.gemini_utils import AIUnavailableError

    client = MagicMock()
    error = AIUnavailableError('quota exceeded')
    client.summarize.side_effect = error
    client.translate.side_effect = error
    client.summarize_and_translate.side_effect = error
    return client


@pytest.fixture
def no_sleep():
    """Records requested sleeps instead of sleeping."""
    calls = []

    def sleep(seconds):
        calls.append(seconds)

    sleep.calls = calls
    return sleep


# ============================================================================
# Content Fixtures
# ============================================================================

@pytest.fixture
def sample_blog_text():
    """Twelve sentences, the first three flagged as important research."""
    return (
        "This important research shows how remote work changes team productivity. "
        "The research team studied over forty companies across several different industries. "
        "Their important findings suggest that flexible schedules improve overall morale. "
        "Many managers were skeptical before the study began last spring. "
        "Some employees preferred working from the office on most days. "
        "Others enjoyed the quiet of their home workspace instead. "
        "Commuting time dropped for almost every participant in the group. "
        "Meetings became shorter and more focused over the months. "
        "Several teams adopted written updates in place of calls. "
        "Communication tools played a large role in daily coordination. "
        "Costs for office space went down for some of the firms. "
        "Overall the experiment was considered a success by most teams."
    )


@pytest.fixture
def sample_blog_html(sample_blog_text):
    """Blog page with an <article> body."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>Remote Work Research | Example Blog</title>
        <script>var tracking = true;</script>
    </head>
    <body>
        <nav>Home About</nav>
        <article>
            <h1>Remote Work Research</h1>
            <p>{sample_blog_text}</p>
        </article>
    </body>
    </html>
    """


@pytest.fixture
def scraped_post(sample_blog_text):
    """Scraped content as returned by scrape_blog_content()."""
    from datetime import datetime, timezone

    return {
        'title': 'Remote Work Research',
        'content': sample_blog_text,
        'url': 'https://blog.example.com/remote-work',
        'scraped_at': datetime(2024, 12, 15, 10, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def summary_result():
    """SummaryResult as produced by the pipeline."""
    return {
        'summary': 'Remote work improves morale.',
        'key_points': ['Flexible schedules help', 'Meetings got shorter'],
        'word_count': 130,
        'original_length': 800,
        'source': 'gemini',
    }
