"""
Gemini client for the Blog Summarizer.

Exposes the three model operations the pipeline needs. Each returns the raw
model text (never assumed to be valid JSON) and raises AIUnavailableError on
any failure so callers can fall back.
"""

import os
from typing import Optional

import google.generativeai as genai

from .rate_limit_utils import RateLimiter

# Configuration
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash')
GEMINI_TIMEOUT = float(os.environ.get('GEMINI_TIMEOUT', '60'))

# Limit content sent to Gemini
MAX_AI_CONTENT_CHARS = 10000

HEALTH_CHECK_TEXT = 'This is a test content for health check.'

SUMMARY_PROMPT = """Please analyze and summarize the following blog content. Provide:
1. A concise summary (3-5 sentences)
2. Key points (3-5 bullet points)
3. Make it informative and well-structured

Content:
{content}

Please format your response as JSON with the following structure:
{{
  "summary": "your summary here",
  "keyPoints": ["point 1", "point 2", "point 3"]
}}
"""

TRANSLATION_PROMPT = """Translate the following English text to Urdu.
Make sure the translation is accurate, natural, and maintains the meaning of the original text.
Please provide only the Urdu translation without any additional text or explanations.

Text to translate:
{text}
"""

COMBINED_PROMPT = """Please analyze the following blog content and provide:
1. A concise English summary (3-5 sentences)
2. Key points (3-5 bullet points)
3. Urdu translation of the summary

Content:
{content}

Please format your response as JSON with the following structure:
{{
  "summary": "your English summary here",
  "keyPoints": ["point 1", "point 2", "point 3"],
  "summaryUrdu": "your Urdu translation of the summary here"
}}
"""


class AIUnavailableError(Exception):
    """Gemini could not be reached or returned nothing usable."""


class GeminiClient:
    """Thin wrapper around google.generativeai for summarize/translate calls."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None,
                 timeout: Optional[float] = None, rate_limiter: Optional[RateLimiter] = None):
        self.api_key = api_key or GEMINI_API_KEY
        self.model_name = model_name or GEMINI_MODEL
        self.timeout = timeout or GEMINI_TIMEOUT
        self.rate_limiter = rate_limiter

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str) -> str:
        """Send a prompt to Gemini and return the response text."""
        if not self.api_key:
            raise AIUnavailableError('GEMINI_API_KEY not configured')

        if self.rate_limiter:
            self.rate_limiter.wait()

        try:
            genai.configure(api_key=self.api_key)
            model = genai.GenerativeModel(self.model_name)
            response = model.generate_content(
                prompt,
                request_options={'timeout': self.timeout}
            )
            text = response.text
        except Exception as e:
            raise AIUnavailableError(f'Gemini request failed: {e}') from e

        if not text or not text.strip():
            raise AIUnavailableError('Gemini returned an empty response')

        return text

    def summarize(self, text: str) -> str:
        return self.generate(SUMMARY_PROMPT.format(content=text[:MAX_AI_CONTENT_CHARS]))

    def translate(self, text: str) -> str:
        return self.generate(TRANSLATION_PROMPT.format(text=text[:MAX_AI_CONTENT_CHARS])).strip()

    def summarize_and_translate(self, text: str) -> str:
        return self.generate(COMBINED_PROMPT.format(content=text[:MAX_AI_CONTENT_CHARS]))

    def ping(self) -> bool:
        """Health check: True if a short summarize call returns text."""
        try:
            return bool(self.summarize(HEALTH_CHECK_TEXT).strip())
        except AIUnavailableError as e:
            print(f"Gemini health check failed: {e}")
            return False
