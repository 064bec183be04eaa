"""
Persistence for the Blog Summarizer.

Two independent stores:
- MongoDB (blog_summarizer.blog_posts): full scraped content plus results
- Supabase (blog_summaries table, via its REST API): results only

Writes return (id, error) tuples. Nothing here retries: a failed write is
reported to the caller, which treats storage as mandatory.
"""

import os
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import requests
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

# Configuration
MONGODB_URI = os.environ.get('MONGODB_URI')
MONGODB_DB = os.environ.get('MONGODB_DB', 'blog_summarizer')
SUPABASE_URL = os.environ.get('SUPABASE_URL')
SUPABASE_KEY = os.environ.get('SUPABASE_KEY')

BLOG_POSTS_COLLECTION = 'blog_posts'
SUMMARIES_TABLE = 'blog_summaries'
SUPABASE_TIMEOUT = 10
MONGODB_TIMEOUT_MS = 5000

# MongoClient is expensive to create, reuse it across invocations
_mongo_client_cache = {}


def get_mongo_client(uri: Optional[str] = None) -> Optional[MongoClient]:
    """Return a cached MongoClient for uri (defaults to MONGODB_URI)."""
    uri = uri or MONGODB_URI
    if not uri:
        return None

    if uri not in _mongo_client_cache:
        _mongo_client_cache[uri] = MongoClient(uri, serverSelectionTimeoutMS=MONGODB_TIMEOUT_MS)
    return _mongo_client_cache[uri]


def _resolve_client(client: Optional[MongoClient]) -> Tuple[Optional[MongoClient], Optional[str]]:
    """Use the given client or build one from MONGODB_URI. Returns (client, error)."""
    if client is not None:
        return client, None
    try:
        client = get_mongo_client()
    except PyMongoError as e:
        return None, f'Invalid MongoDB configuration: {e}'
    if client is None:
        return None, 'MONGODB_URI not configured'
    return client, None


def _blog_posts(client: MongoClient):
    return client[MONGODB_DB][BLOG_POSTS_COLLECTION]


def _serialize_document(doc: Dict) -> Dict:
    """Make a MongoDB document JSON friendly."""
    serialized = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            value = str(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        serialized['id' if key == '_id' else key] = value
    return serialized


def build_blog_post(scraped: Dict, summary: Dict, summary_urdu: str) -> Dict:
    """Full MongoDB document for a processed blog post."""
    return {
        'title': scraped['title'],
        'content': scraped['content'],
        'url': scraped['url'],
        'scraped_at': scraped.get('scraped_at'),
        'summary': summary['summary'],
        'summary_urdu': summary_urdu,
        'key_points': summary['key_points'],
        'word_count': summary['word_count'],
        'original_length': summary['original_length'],
        'created_at': datetime.now(timezone.utc),
    }


def build_summary_record(scraped: Dict, summary: Dict, summary_urdu: str) -> Dict:
    """Supabase row for a processed blog post (no full content)."""
    return {
        'title': scraped['title'],
        'summary': summary['summary'],
        'summary_urdu': summary_urdu,
        'url': scraped['url'],
        'word_count': summary['word_count'],
        'original_length': summary['original_length'],
        'created_at': datetime.now(timezone.utc).isoformat(),
    }


def save_blog_post(scraped: Dict, summary: Dict, summary_urdu: str,
                   client: Optional[MongoClient] = None) -> Tuple[Optional[str], Optional[str]]:
    """Insert the full blog post into MongoDB. Returns (inserted_id, error)."""
    client, error = _resolve_client(client)
    if error:
        return None, error

    try:
        result = _blog_posts(client).insert_one(build_blog_post(scraped, summary, summary_urdu))
        return str(result.inserted_id), None
    except PyMongoError as e:
        print(f"Error saving to MongoDB: {e}")
        return None, f'Failed to save blog post to MongoDB: {e}'


def get_blog_post(post_id: str, client: Optional[MongoClient] = None) -> Tuple[Optional[Dict], Optional[str]]:
    """Fetch one blog post by id. Returns (post, error); post is None if not found."""
    client, error = _resolve_client(client)
    if error:
        return None, error

    try:
        object_id = ObjectId(post_id)
    except (InvalidId, TypeError):
        return None, f'Invalid blog post id: {post_id}'

    try:
        doc = _blog_posts(client).find_one({'_id': object_id})
    except PyMongoError as e:
        print(f"Error fetching blog post: {e}")
        return None, f'Failed to fetch blog post from MongoDB: {e}'

    return (_serialize_document(doc) if doc else None), None


def list_blog_posts(limit: int = 10, skip: int = 0,
                    client: Optional[MongoClient] = None) -> Tuple[List[Dict], Optional[str]]:
    """Most recent blog posts first. Returns (posts, error)."""
    client, error = _resolve_client(client)
    if error:
        return [], error

    try:
        cursor = _blog_posts(client).find({}).sort('created_at', -1).skip(skip).limit(limit)
        return [_serialize_document(doc) for doc in cursor], None
    except PyMongoError as e:
        print(f"Error fetching blog posts: {e}")
        return [], f'Failed to fetch blog posts from MongoDB: {e}'


def _supabase_config(url: Optional[str], key: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    return (url or SUPABASE_URL), (key or SUPABASE_KEY)


def _supabase_headers(key: str) -> Dict:
    return {
        'apikey': key,
        'Authorization': f'Bearer {key}',
        'Content-Type': 'application/json',
        'Prefer': 'return=representation',
    }


def _table_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/rest/v1/{SUMMARIES_TABLE}"


def save_summary_record(scraped: Dict, summary: Dict, summary_urdu: str,
                        url: Optional[str] = None, key: Optional[str] = None) -> Tuple[Optional[int], Optional[str]]:
    """Insert the summary row into Supabase. Returns (row_id, error)."""
    url, key = _supabase_config(url, key)
    if not url or not key:
        return None, 'SUPABASE_URL/SUPABASE_KEY not configured'

    try:
        response = requests.post(
            _table_url(url),
            headers=_supabase_headers(key),
            json=[build_summary_record(scraped, summary, summary_urdu)],
            timeout=SUPABASE_TIMEOUT
        )
        response.raise_for_status()
        return response.json()[0]['id'], None
    except requests.exceptions.HTTPError as e:
        print(f"Supabase error: {e.response.status_code} - {e.response.text[:200]}")
        return None, f'Failed to save summary to Supabase: HTTP {e.response.status_code}'
    except requests.exceptions.RequestException as e:
        print(f"Error saving to Supabase: {e}")
        return None, f'Failed to save summary to Supabase: {e}'
    except (ValueError, KeyError, IndexError, TypeError) as e:
        return None, f'Unexpected Supabase response: {e}'


def list_summaries(limit: int = 20, url: Optional[str] = None,
                   key: Optional[str] = None) -> Tuple[List[Dict], Optional[str]]:
    """Most recent summaries first. Returns (rows, error)."""
    url, key = _supabase_config(url, key)
    if not url or not key:
        return [], 'SUPABASE_URL/SUPABASE_KEY not configured'

    try:
        response = requests.get(
            _table_url(url),
            headers=_supabase_headers(key),
            params={'select': '*', 'order': 'created_at.desc', 'limit': limit},
            timeout=SUPABASE_TIMEOUT
        )
        response.raise_for_status()
        return response.json() or [], None
    except requests.exceptions.HTTPError as e:
        return [], f'Failed to fetch summaries from Supabase: HTTP {e.response.status_code}'
    except requests.exceptions.RequestException as e:
        return [], f'Failed to fetch summaries from Supabase: {e}'
    except ValueError as e:
        return [], f'Unexpected Supabase response: {e}'


def check_connections(client: Optional[MongoClient] = None, url: Optional[str] = None,
                      key: Optional[str] = None) -> Dict[str, bool]:
    """Independent reachability check of both stores."""
    results = {'mongodb': False, 'supabase': False}

    client, error = _resolve_client(client)
    if error:
        print(f"MongoDB connection test skipped: {error}")
    else:
        try:
            client.admin.command('ping')
            results['mongodb'] = True
        except PyMongoError as e:
            print(f"MongoDB connection test failed: {e}")

    url, key = _supabase_config(url, key)
    if url and key:
        try:
            response = requests.get(
                _table_url(url),
                headers=_supabase_headers(key),
                params={'select': 'id', 'limit': 1},
                timeout=SUPABASE_TIMEOUT
            )
            results['supabase'] = response.ok
        except requests.exceptions.RequestException as e:
            print(f"Supabase connection test failed: {e}")

    return results
