"""
Blog Summarizer Cloud Function

Summarizes blog posts in English and translates the summary to Urdu.

Responsibilities:
- Fetch the blog post and extract readable text
- Summarize with Gemini (extractive fallback)
- Translate the summary to Urdu with Gemini (dictionary fallback)
- Store the full post in MongoDB and the summary in Supabase

Entry points (functions-framework targets):
- summarize_blog: POST {url, mode} / GET stored summaries or blog posts
- translate_urdu: POST {text}
- health_check: GET
"""

import functions_framework
import json
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional

# Add summarizer package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from summarizer.content_utils import check_content_source, is_valid_url, scrape_blog_content
from summarizer.gemini_utils import GeminiClient
from summarizer.pipeline_utils import MODE_COMBINED, MODES, generate_summary_and_translation, translate_with_fallback
from summarizer.rate_limit_utils import RateLimiterRegistry
from summarizer.storage_utils import (
    check_connections,
    get_blog_post,
    list_blog_posts,
    list_summaries,
    save_blog_post,
    save_summary_record,
)

# Configuration
GEMINI_MIN_INTERVAL = float(os.environ.get('GEMINI_MIN_INTERVAL', '1.0'))
HEALTH_CHECK_URL = os.environ.get('HEALTH_CHECK_URL', 'https://www.example.com')
DEFAULT_LIST_LIMIT = 20
MAX_LIST_LIMIT = 100

SOURCE_SUPABASE = 'supabase'
SOURCE_MONGODB = 'mongodb'
LIST_SOURCES = (SOURCE_SUPABASE, SOURCE_MONGODB)

# One registry for the lifetime of the function instance
rate_limiters = RateLimiterRegistry(default_interval=GEMINI_MIN_INTERVAL)

CORS_HEADERS = {'Access-Control-Allow-Origin': '*'}
JSON_HEADERS = {**CORS_HEADERS, 'Content-Type': 'application/json; charset=utf-8'}


def get_gemini_client() -> Optional[GeminiClient]:
    """Gemini client sharing the process-wide rate limiter, or None without GEMINI_API_KEY."""
    client = GeminiClient(rate_limiter=rate_limiters.get('gemini'))
    if not client.is_configured:
        print("GEMINI_API_KEY not configured, using local fallbacks")
        return None
    return client


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


def json_response(body: dict, status: int = 200) -> tuple:
    return (json.dumps(body, ensure_ascii=False, default=str), status, JSON_HEADERS)


def error_response(stage: str, message: str, recoverable: bool, status: int, **extra) -> tuple:
    body = dict(extra)
    body['error'] = {
        'stage': stage,
        'message': message,
        'recoverable': recoverable,
    }
    return json_response(body, status)


def preflight_response(methods: str) -> tuple:
    headers = {
        'Access-Control-Allow-Origin': '*',
        'Access-Control-Allow-Methods': methods,
        'Access-Control-Allow-Headers': 'Content-Type',
        'Access-Control-Max-Age': '3600'
    }
    return ('', 204, headers)


def parse_limit(value) -> int:
    """Clamp a ?limit= query value to 1..MAX_LIST_LIMIT."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return DEFAULT_LIST_LIMIT
    return max(1, min(limit, MAX_LIST_LIMIT))


def process_blog(url: str, mode: str, client: Optional[GeminiClient]) -> tuple:
    """Run the full pipeline for one URL and build the HTTP response."""
    print(f"Scraping content from: {url}")
    scraped, fetch_error = scrape_blog_content(url)

    if fetch_error:
        # Return 200 with error in body, same contract as other processing errors
        return error_response('fetch', fetch_error, True, 200, url=url)

    print(f"Generating summary and translation ({mode} mode)...")
    result = generate_summary_and_translation(scraped['content'], client, mode=mode)
    summary = result['summary']
    summary_urdu = result['translation']['translated_text']

    print("Saving to databases...")
    mongo_id, mongo_error = save_blog_post(scraped, summary, summary_urdu)
    if mongo_error:
        return error_response('storage', mongo_error, True, 500, url=url)

    supabase_id, supabase_error = save_summary_record(scraped, summary, summary_urdu)
    if supabase_error:
        return error_response('storage', supabase_error, True, 500, url=url,
                              storage_ids={'mongodb': mongo_id, 'supabase': None})

    return json_response({
        'success': True,
        'title': scraped['title'],
        'url': scraped['url'],
        'summary': summary['summary'],
        'translated_summary': summary_urdu,
        'key_points': summary['key_points'],
        'word_count': summary['word_count'],
        'original_length': summary['original_length'],
        'storage_ids': {
            'mongodb': mongo_id,
            'supabase': supabase_id,
        },
        'scraped_at': scraped['scraped_at'].isoformat(),
        'processed_at': utc_timestamp(),
        'mode': result['mode'],
        'ai_powered': summary.get('source') == 'gemini',
        'translation_source': result['translation'].get('source'),
    })


def parse_skip(value) -> int:
    """Non-negative ?skip= query value (0 when missing or invalid)."""
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def list_stored(request) -> tuple:
    """
    GET: one stored blog post (?id=) or recent records.

    ?source=supabase (default) lists summaries (?limit=); ?source=mongodb
    lists full blog posts (?limit=, ?skip=).
    """
    args = getattr(request, 'args', None) or {}
    post_id = args.get('id')

    if post_id:
        post, error = get_blog_post(post_id)
        if error:
            return error_response('storage', error, True, 500)
        if post is None:
            return error_response('validation', f'Blog post not found: {post_id}', False, 404)
        return json_response({'success': True, 'data': post})

    source = args.get('source') or SOURCE_SUPABASE
    if source not in LIST_SOURCES:
        return error_response('validation', f"Invalid source: {source} (expected one of {', '.join(LIST_SOURCES)})", False, 400)

    limit = parse_limit(args.get('limit'))
    if source == SOURCE_MONGODB:
        records, error = list_blog_posts(limit=limit, skip=parse_skip(args.get('skip')))
    else:
        records, error = list_summaries(limit=limit)

    if error:
        return error_response('storage', error, True, 500)
    return json_response({'success': True, 'source': source, 'data': records})


@functions_framework.http
def summarize_blog(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "url": "https://example.com/blog/post",
        "mode": "combined"    # or "separate"
    }
    """
    if request.method == 'OPTIONS':
        return preflight_response('GET, POST')

    try:
        if request.method == 'GET':
            return list_stored(request)

        request_json = request.get_json(silent=True)

        if not isinstance(request_json, dict) or 'url' not in request_json:
            return error_response('validation', 'Missing required field: url', False, 400)

        url = request_json['url']
        if not is_valid_url(url):
            return error_response('validation', 'Invalid URL format', False, 400)

        mode = request_json.get('mode') or MODE_COMBINED
        if mode not in MODES:
            return error_response('validation', f"Invalid mode: {mode} (expected one of {', '.join(MODES)})", False, 400)

        return process_blog(url.strip(), mode, get_gemini_client())

    except Exception as e:
        print(f"Error in summarize_blog: {e}\n{traceback.format_exc()}")
        return error_response('processing', str(e), False, 500)


@functions_framework.http
def translate_urdu(request):
    """
    Translate English text to Urdu (Gemini with dictionary fallback).

    Expected JSON input:
    {
        "text": "Technology is changing the world."
    }
    """
    if request.method == 'OPTIONS':
        return preflight_response('POST')

    try:
        request_json = request.get_json(silent=True)

        if not isinstance(request_json, dict) or not isinstance(request_json.get('text'), str) or not request_json['text'].strip():
            return error_response('validation', 'Missing required field: text', False, 400)

        text = request_json['text'].strip()
        print(f"Translating {len(text)} chars to Urdu")
        translation = translate_with_fallback(text, get_gemini_client())

        return json_response({
            'success': True,
            **translation,
            'processed_at': utc_timestamp(),
        })

    except Exception as e:
        print(f"Error in translate_urdu: {e}\n{traceback.format_exc()}")
        return error_response('processing', str(e), False, 500)


@functions_framework.http
def health_check(request):
    """Independent reachability of the content source, both stores and Gemini."""
    if request.method == 'OPTIONS':
        return preflight_response('GET')

    try:
        connections = check_connections()
        connections['content_source'] = check_content_source(HEALTH_CHECK_URL)
        gemini = get_gemini_client()
        connections['gemini'] = gemini.ping() if gemini else False

        return json_response({
            'success': True,
            'timestamp': utc_timestamp(),
            'connections': connections,
            'status': 'healthy' if all(connections.values()) else 'partial',
        })

    except Exception as e:
        print(f"Health check failed: {e}\n{traceback.format_exc()}")
        return json_response({
            'success': False,
            'error': {
                'stage': 'processing',
                'message': f'Health check failed: {e}',
                'recoverable': True
            },
            'timestamp': utc_timestamp(),
        }, 500)
