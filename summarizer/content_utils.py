"""
Blog content fetching and extraction.

Fetches a blog URL and pulls out its title and readable body text. Any
failure here is terminal for the request: there is no fallback source.
"""

import re
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
FETCH_TIMEOUT = 10

MIN_CONTENT_LENGTH = 50
DEFAULT_TITLE = 'Untitled Blog Post'

# Common blog content containers, most specific first
CONTENT_SELECTORS = [
    'article',
    '.post-content',
    '.entry-content',
    '.content',
    '.post-body',
    '.article-content',
    'main',
    '[role="main"]',
]


def is_valid_url(url) -> bool:
    """Check that url is an absolute http(s) URL."""
    if not url or not isinstance(url, str):
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def fetch_webpage(url: str) -> tuple:
    """Fetch webpage content. Returns (html, error)."""
    try:
        headers = {
            'User-Agent': USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        }

        response = requests.get(url, headers=headers, timeout=FETCH_TIMEOUT, allow_redirects=True)
        response.raise_for_status()

        return response.text, None

    except requests.exceptions.Timeout:
        return None, 'Request timed out'
    except requests.exceptions.HTTPError as e:
        return None, f'HTTP error: {e.response.status_code}'
    except requests.exceptions.RequestException as e:
        return None, f'Request failed: {str(e)}'


def extract_title(soup: BeautifulSoup) -> str:
    """Page title from <title>, else the first <h1>, else a placeholder."""
    if not soup:
        return DEFAULT_TITLE

    title_tag = soup.find('title')
    title = title_tag.get_text(strip=True) if title_tag else ''

    if not title:
        h1_tag = soup.find('h1')
        title = h1_tag.get_text(strip=True) if h1_tag else ''

    return title or DEFAULT_TITLE


def extract_blog_text(soup: BeautifulSoup) -> str:
    """Readable body text from the first matching content container, else all <p> tags."""
    if not soup:
        return ''

    for element in soup.find_all(['script', 'style', 'noscript']):
        element.decompose()

    content = ''
    for selector in CONTENT_SELECTORS:
        elements = soup.select(selector)
        if elements:
            content = ' '.join(el.get_text(separator=' ', strip=True) for el in elements)
            break

    if not content:
        paragraphs = [p.get_text(strip=True) for p in soup.find_all('p')]
        content = '\n\n'.join(p for p in paragraphs if p)

    return re.sub(r'\s+', ' ', content).strip()


def extract_blog_content(html: str) -> Dict:
    """Parse HTML into title and content."""
    soup = BeautifulSoup(html or '', 'html.parser')
    return {
        'title': extract_title(soup),
        'content': extract_blog_text(soup),
    }


def scrape_blog_content(url: str) -> Tuple[Optional[Dict], Optional[str]]:
    """
    Fetch a blog post and extract its content.

    Returns:
        Tuple of (scraped, error). scraped has title, content, url and
        scraped_at; error is a message when the page could not be fetched or
        held too little text.
    """
    html, fetch_error = fetch_webpage(url)
    if fetch_error:
        return None, f'Failed to fetch webpage: {fetch_error}'

    extracted = extract_blog_content(html)
    if len(extracted['content']) < MIN_CONTENT_LENGTH:
        return None, 'Could not extract sufficient content from the webpage'

    return {
        'title': extracted['title'],
        'content': extracted['content'],
        'url': url,
        'scraped_at': datetime.now(timezone.utc),
    }, None


def check_content_source(check_url: str) -> bool:
    """Health check: True if check_url answers without a server error."""
    try:
        response = requests.get(check_url, headers={'User-Agent': USER_AGENT}, timeout=FETCH_TIMEOUT)
        return response.status_code < 500
    except requests.exceptions.RequestException as e:
        print(f"Content source health check failed: {e}")
        return False
