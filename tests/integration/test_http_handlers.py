"""
Integration tests for HTTP handlers with mocked external APIs.

Uses the `responses` library to mock requests; storage and Gemini are
patched on the loaded Cloud Function module.
"""

import json

import pytest
import requests
import responses
from unittest.mock import patch, MagicMock

from summarizer.content_utils import (
    DEFAULT_TITLE,
    check_content_source,
    extract_blog_content,
    fetch_webpage,
    scrape_blog_content,
)


class TestFetchWebpage:
    """Tests for fetch_webpage() with mocked HTTP responses."""

    @responses.activate
    def test_success_returns_html(self):
        """Successful fetch returns HTML content."""
        test_url = "https://example.com/article"
        test_html = "<html><body><h1>Test Article</h1></body></html>"

        responses.add(
            responses.GET,
            test_url,
            body=test_html,
            status=200,
            content_type="text/html"
        )

        html, error = fetch_webpage(test_url)
        assert html == test_html
        assert error is None

    @responses.activate
    def test_sends_browser_user_agent(self):
        test_url = "https://example.com/article"
        responses.add(responses.GET, test_url, body="<html></html>", status=200)

        fetch_webpage(test_url)
        assert 'Mozilla/5.0' in responses.calls[0].request.headers['User-Agent']

    @responses.activate
    def test_404_returns_error(self):
        """404 response returns error tuple."""
        test_url = "https://example.com/not-found"
        responses.add(responses.GET, test_url, status=404)

        html, error = fetch_webpage(test_url)
        assert html is None
        assert error == 'HTTP error: 404'

    @responses.activate
    def test_timeout_returns_error(self):
        """Request timeout returns error tuple."""
        test_url = "https://example.com/slow"
        responses.add(responses.GET, test_url, body=requests.exceptions.Timeout())

        html, error = fetch_webpage(test_url)
        assert html is None
        assert error == 'Request timed out'

    @responses.activate
    def test_connection_error(self):
        """Connection error returns error tuple."""
        test_url = "https://unreachable.example.com"
        responses.add(responses.GET, test_url, body=requests.exceptions.ConnectionError('refused'))

        html, error = fetch_webpage(test_url)
        assert html is None
        assert error.startswith('Request failed:')


class TestExtractBlogContent:
    """Tests for extract_blog_content()"""

    def test_article_body_and_title(self, sample_blog_html):
        extracted = extract_blog_content(sample_blog_html)
        assert extracted['title'] == 'Remote Work Research | Example Blog'
        assert 'This important research shows' in extracted['content']
        assert 'tracking' not in extracted['content']
        assert 'Home About' not in extracted['content']

    def test_h1_when_no_title_tag(self):
        html = "<html><body><h1>Heading Title</h1><p>Body</p></body></html>"
        assert extract_blog_content(html)['title'] == 'Heading Title'

    def test_placeholder_title(self):
        assert extract_blog_content("<html><body><p>Body</p></body></html>")['title'] == DEFAULT_TITLE

    def test_selector_order(self):
        html = """
        <html><body>
            <main>Main area text</main>
            <div class="entry-content">Entry content text</div>
        </body></html>
        """
        assert extract_blog_content(html)['content'] == 'Entry content text'

    def test_paragraph_fallback(self):
        html = "<html><body><div><p>First paragraph.</p><p>Second   paragraph.</p></div></body></html>"
        assert extract_blog_content(html)['content'] == 'First paragraph. Second paragraph.'


class TestScrapeBlogContent:
    """Tests for scrape_blog_content() with mocked HTTP responses."""

    @responses.activate
    def test_success(self, sample_blog_html):
        test_url = "https://blog.example.com/remote-work"
        responses.add(responses.GET, test_url, body=sample_blog_html, status=200, content_type="text/html")

        scraped, error = scrape_blog_content(test_url)
        assert error is None
        assert scraped['url'] == test_url
        assert scraped['title'] == 'Remote Work Research | Example Blog'
        assert len(scraped['content']) >= 50
        assert scraped['scraped_at'].tzinfo is not None

    @responses.activate
    def test_fetch_failure(self):
        test_url = "https://blog.example.com/missing"
        responses.add(responses.GET, test_url, status=404)

        scraped, error = scrape_blog_content(test_url)
        assert scraped is None
        assert error == 'Failed to fetch webpage: HTTP error: 404'

    @responses.activate
    def test_too_little_content(self):
        test_url = "https://blog.example.com/empty"
        responses.add(responses.GET, test_url, body="<html><body><article>Too short</article></body></html>",
                      status=200, content_type="text/html")

        scraped, error = scrape_blog_content(test_url)
        assert scraped is None
        assert error == 'Could not extract sufficient content from the webpage'


class TestCheckContentSource:
    """Tests for check_content_source()"""

    @responses.activate
    def test_reachable(self):
        responses.add(responses.GET, "https://www.example.com", status=200)
        assert check_content_source("https://www.example.com") is True

    @responses.activate
    def test_client_error_still_reachable(self):
        responses.add(responses.GET, "https://www.example.com", status=403)
        assert check_content_source("https://www.example.com") is True

    @responses.activate
    def test_server_error(self):
        responses.add(responses.GET, "https://www.example.com", status=503)
        assert check_content_source("https://www.example.com") is False

    @responses.activate
    def test_unreachable(self):
        responses.add(responses.GET, "https://www.example.com", body=requests.exceptions.ConnectionError())
        assert check_content_source("https://www.example.com") is False


# ============================================================================
# Cloud Function handlers
# ============================================================================

@pytest.fixture
def patched_pipeline(blog_summarizer_module, scraped_post, fake_gemini):
    """Patch scraping, storage and Gemini on the loaded module."""
    with patch.object(blog_summarizer_module, 'scrape_blog_content', return_value=(scraped_post, None)) as scrape, \
         patch.object(blog_summarizer_module, 'save_blog_post', return_value=('65a1b2c3d4e5f6a7b8c9d0e1', None)) as save_post, \
         patch.object(blog_summarizer_module, 'save_summary_record', return_value=(42, None)) as save_record, \
         patch.object(blog_summarizer_module, 'get_gemini_client', return_value=fake_gemini):
        yield {
            'scrape': scrape,
            'save_post': save_post,
            'save_record': save_record,
            'gemini': fake_gemini,
        }


class TestSummarizeBlogHandler:
    """Tests for the summarize_blog entry point."""

    def test_success_response(self, mock_flask_request, summarize_blog, patched_pipeline):
        request = mock_flask_request(json_data={'url': 'https://blog.example.com/remote-work'})
        response, status_code, headers = summarize_blog(request)

        assert status_code == 200
        assert headers['Access-Control-Allow-Origin'] == '*'
        data = json.loads(response)
        assert 'error' not in data
        assert data['success'] is True
        assert data['title'] == 'Remote Work Research'
        assert data['summary'] == 'AI summary.'
        assert data['translated_summary'] == 'اے آئی خلاصہ۔'
        assert data['key_points'] == ['one']
        assert data['storage_ids'] == {'mongodb': '65a1b2c3d4e5f6a7b8c9d0e1', 'supabase': 42}
        assert data['scraped_at'] == '2024-12-15T10:00:00+00:00'
        assert data['mode'] == 'combined'
        assert data['ai_powered'] is True
        assert data['translation_source'] == 'gemini'
        assert data['processed_at'].endswith('Z')

    def test_urdu_is_not_escaped(self, mock_flask_request, summarize_blog, patched_pipeline):
        request = mock_flask_request(json_data={'url': 'https://blog.example.com/remote-work'})
        response, _, headers = summarize_blog(request)
        assert 'اے آئی خلاصہ۔' in response
        assert 'charset=utf-8' in headers['Content-Type']

    def test_separate_mode(self, mock_flask_request, summarize_blog, patched_pipeline):
        request = mock_flask_request(json_data={'url': 'https://blog.example.com/remote-work', 'mode': 'separate'})
        response, status_code, _ = summarize_blog(request)

        data = json.loads(response)
        assert status_code == 200
        assert data['mode'] == 'separate'
        assert data['translated_summary'] == 'ٹیکنالوجی دنیا کو بدل رہی ہے۔'
        patched_pipeline['gemini'].summarize.assert_called_once()
        patched_pipeline['gemini'].translate.assert_called_once()

    def test_gemini_down_still_succeeds(self, mock_flask_request, summarize_blog, blog_summarizer_module,
                                        patched_pipeline, failing_gemini):
        with patch.object(blog_summarizer_module, 'get_gemini_client', return_value=failing_gemini):
            request = mock_flask_request(json_data={'url': 'https://blog.example.com/remote-work'})
            response, status_code, _ = summarize_blog(request)

        data = json.loads(response)
        assert status_code == 200
        assert data['ai_powered'] is False
        assert data['translation_source'] == 'dictionary'
        assert data['summary']
        assert data['translated_summary']

    def test_stores_summary_and_translation(self, mock_flask_request, summarize_blog, patched_pipeline, scraped_post):
        request = mock_flask_request(json_data={'url': 'https://blog.example.com/remote-work'})
        summarize_blog(request)

        args = patched_pipeline['save_post'].call_args[0]
        assert args[0] == scraped_post
        assert args[1]['summary'] == 'AI summary.'
        assert args[2] == 'اے آئی خلاصہ۔'
        patched_pipeline['save_record'].assert_called_once_with(scraped_post, args[1], 'اے آئی خلاصہ۔')

    def test_url_is_trimmed(self, mock_flask_request, summarize_blog, patched_pipeline):
        request = mock_flask_request(json_data={'url': '  https://blog.example.com/remote-work  '})
        summarize_blog(request)
        patched_pipeline['scrape'].assert_called_once_with('https://blog.example.com/remote-work')

    def test_options_preflight(self, mock_flask_request, summarize_blog):
        request = mock_flask_request(method='OPTIONS')
        response, status_code, headers = summarize_blog(request)

        assert status_code == 204
        assert response == ''
        assert 'POST' in headers['Access-Control-Allow-Methods']
        assert 'GET' in headers['Access-Control-Allow-Methods']


class TestListStoredHandler:
    """Tests for GET on summarize_blog."""

    def test_lists_recent_summaries(self, mock_flask_request, summarize_blog, blog_summarizer_module):
        rows = [{'id': 2, 'title': 'Second'}, {'id': 1, 'title': 'First'}]
        with patch.object(blog_summarizer_module, 'list_summaries', return_value=(rows, None)) as list_mock:
            response, status_code, _ = summarize_blog(mock_flask_request(method='GET', args={'limit': '5'}))

        assert status_code == 200
        assert json.loads(response) == {'success': True, 'source': 'supabase', 'data': rows}
        list_mock.assert_called_once_with(limit=5)

    @pytest.mark.parametrize("raw_limit, expected", [
        (None, 20),
        ('abc', 20),
        ('0', 1),
        ('500', 100),
    ])
    def test_limit_is_clamped(self, mock_flask_request, summarize_blog, blog_summarizer_module, raw_limit, expected):
        args = {} if raw_limit is None else {'limit': raw_limit}
        with patch.object(blog_summarizer_module, 'list_summaries', return_value=([], None)) as list_mock:
            summarize_blog(mock_flask_request(method='GET', args=args))
        list_mock.assert_called_once_with(limit=expected)

    def test_lists_mongodb_posts(self, mock_flask_request, summarize_blog, blog_summarizer_module):
        posts = [{'id': '65a1b2c3d4e5f6a7b8c9d0e1', 'title': 'Remote Work Research'}]
        with patch.object(blog_summarizer_module, 'list_blog_posts', return_value=(posts, None)) as posts_mock, \
             patch.object(blog_summarizer_module, 'list_summaries') as summaries_mock:
            response, status_code, _ = summarize_blog(
                mock_flask_request(method='GET', args={'source': 'mongodb', 'limit': '5', 'skip': '10'})
            )

        assert status_code == 200
        assert json.loads(response) == {'success': True, 'source': 'mongodb', 'data': posts}
        posts_mock.assert_called_once_with(limit=5, skip=10)
        summaries_mock.assert_not_called()

    @pytest.mark.parametrize("raw_skip, expected", [(None, 0), ('abc', 0), ('-3', 0), ('7', 7)])
    def test_skip_is_clamped(self, mock_flask_request, summarize_blog, blog_summarizer_module, raw_skip, expected):
        args = {'source': 'mongodb'}
        if raw_skip is not None:
            args['skip'] = raw_skip
        with patch.object(blog_summarizer_module, 'list_blog_posts', return_value=([], None)) as posts_mock:
            summarize_blog(mock_flask_request(method='GET', args=args))
        posts_mock.assert_called_once_with(limit=20, skip=expected)

    def test_unknown_source_is_400(self, mock_flask_request, summarize_blog, blog_summarizer_module):
        with patch.object(blog_summarizer_module, 'list_summaries') as summaries_mock, \
             patch.object(blog_summarizer_module, 'list_blog_posts') as posts_mock:
            response, status_code, _ = summarize_blog(mock_flask_request(method='GET', args={'source': 'redis'}))

        assert status_code == 400
        error = json.loads(response)['error']
        assert error['stage'] == 'validation'
        assert 'redis' in error['message']
        summaries_mock.assert_not_called()
        posts_mock.assert_not_called()

    def test_single_post_by_id(self, mock_flask_request, summarize_blog, blog_summarizer_module):
        post = {'id': '65a1b2c3d4e5f6a7b8c9d0e1', 'title': 'Remote Work Research'}
        with patch.object(blog_summarizer_module, 'get_blog_post', return_value=(post, None)):
            response, status_code, _ = summarize_blog(
                mock_flask_request(method='GET', args={'id': '65a1b2c3d4e5f6a7b8c9d0e1'})
            )

        assert status_code == 200
        assert json.loads(response)['data'] == post

    def test_unknown_post_is_404(self, mock_flask_request, summarize_blog, blog_summarizer_module):
        with patch.object(blog_summarizer_module, 'get_blog_post', return_value=(None, None)):
            response, status_code, _ = summarize_blog(
                mock_flask_request(method='GET', args={'id': '65a1b2c3d4e5f6a7b8c9d0e1'})
            )

        assert status_code == 404
        assert json.loads(response)['error']['stage'] == 'validation'

    def test_storage_error_is_500(self, mock_flask_request, summarize_blog, blog_summarizer_module):
        with patch.object(blog_summarizer_module, 'list_summaries',
                          return_value=([], 'SUPABASE_URL/SUPABASE_KEY not configured')):
            response, status_code, _ = summarize_blog(mock_flask_request(method='GET'))

        assert status_code == 500
        assert json.loads(response)['error']['stage'] == 'storage'


class TestTranslateUrduHandler:
    """Tests for the translate_urdu entry point."""

    def test_translates_text(self, mock_flask_request, translate_urdu, blog_summarizer_module, fake_gemini):
        with patch.object(blog_summarizer_module, 'get_gemini_client', return_value=fake_gemini):
            response, status_code, _ = translate_urdu(
                mock_flask_request(json_data={'text': '  Technology is changing the world.  '})
            )

        data = json.loads(response)
        assert status_code == 200
        assert data['success'] is True
        assert data['original_text'] == 'Technology is changing the world.'
        assert data['translated_text'] == 'ٹیکنالوجی دنیا کو بدل رہی ہے۔'
        assert data['language'] == 'urdu'
        assert data['source'] == 'gemini'
        assert 'processed_at' in data

    def test_dictionary_fallback(self, mock_flask_request, translate_urdu, blog_summarizer_module, failing_gemini):
        with patch.object(blog_summarizer_module, 'get_gemini_client', return_value=failing_gemini):
            response, status_code, _ = translate_urdu(mock_flask_request(json_data={'text': 'the world'}))

        data = json.loads(response)
        assert status_code == 200
        assert data['source'] == 'dictionary'
        assert data['translated_text'] == 'یہ دنیا'

    def test_without_api_key_skips_gemini(self, mock_flask_request, translate_urdu, blog_summarizer_module):
        with patch('summarizer.gemini_utils.GEMINI_API_KEY', None), \
             patch.object(blog_summarizer_module, 'translate_with_fallback',
                          wraps=blog_summarizer_module.translate_with_fallback) as translate_mock:
            response, status_code, _ = translate_urdu(mock_flask_request(json_data={'text': 'the world'}))

        data = json.loads(response)
        assert status_code == 200
        assert data['source'] == 'dictionary'
        assert data['translated_text'] == 'یہ دنیا'
        assert translate_mock.call_args[0][1] is None

    @pytest.mark.parametrize("json_data", [None, {}, {'text': ''}, {'text': '   '}, {'text': 42}])
    def test_missing_text(self, mock_flask_request, translate_urdu, json_data):
        response, status_code, _ = translate_urdu(mock_flask_request(json_data=json_data))

        assert status_code == 400
        assert json.loads(response)['error']['message'] == 'Missing required field: text'


class TestHealthCheckHandler:
    """Tests for the health_check entry point."""

    def _run(self, blog_summarizer_module, health_check, mock_flask_request, stores, source, gemini_ok):
        gemini = MagicMock()
        gemini.ping.return_value = gemini_ok
        with patch.object(blog_summarizer_module, 'check_connections', return_value=dict(stores)), \
             patch.object(blog_summarizer_module, 'check_content_source', return_value=source), \
             patch.object(blog_summarizer_module, 'get_gemini_client', return_value=gemini):
            return health_check(mock_flask_request(method='GET'))

    def test_all_healthy(self, blog_summarizer_module, health_check, mock_flask_request):
        response, status_code, _ = self._run(
            blog_summarizer_module, health_check, mock_flask_request,
            {'mongodb': True, 'supabase': True}, True, True
        )

        data = json.loads(response)
        assert status_code == 200
        assert data['status'] == 'healthy'
        assert data['connections'] == {
            'mongodb': True,
            'supabase': True,
            'content_source': True,
            'gemini': True,
        }

    def test_partial(self, blog_summarizer_module, health_check, mock_flask_request):
        response, status_code, _ = self._run(
            blog_summarizer_module, health_check, mock_flask_request,
            {'mongodb': True, 'supabase': False}, True, False
        )

        data = json.loads(response)
        assert status_code == 200
        assert data['status'] == 'partial'
        assert data['connections']['supabase'] is False
        assert data['connections']['gemini'] is False

    def test_gemini_unconfigured(self, blog_summarizer_module, health_check, mock_flask_request):
        with patch('summarizer.gemini_utils.GEMINI_API_KEY', None), \
             patch.object(blog_summarizer_module, 'check_connections',
                          return_value={'mongodb': True, 'supabase': True}), \
             patch.object(blog_summarizer_module, 'check_content_source', return_value=True):
            response, status_code, _ = health_check(mock_flask_request(method='GET'))

        data = json.loads(response)
        assert status_code == 200
        assert data['status'] == 'partial'
        assert data['connections']['gemini'] is False

    def test_unexpected_failure(self, blog_summarizer_module, health_check, mock_flask_request):
        with patch.object(blog_summarizer_module, 'check_connections', side_effect=RuntimeError('boom')):
            response, status_code, _ = health_check(mock_flask_request(method='GET'))

        data = json.loads(response)
        assert status_code == 500
        assert data['success'] is False
        assert 'boom' in data['error']['message']


class TestGetGeminiClient:
    """Tests for get_gemini_client()"""

    def test_none_without_api_key(self, blog_summarizer_module, capsys):
        with patch('summarizer.gemini_utils.GEMINI_API_KEY', None):
            assert blog_summarizer_module.get_gemini_client() is None
        assert 'GEMINI_API_KEY not configured' in capsys.readouterr().out

    def test_client_shares_rate_limiter(self, blog_summarizer_module):
        with patch('summarizer.gemini_utils.GEMINI_API_KEY', 'test-key'):
            first = blog_summarizer_module.get_gemini_client()
            second = blog_summarizer_module.get_gemini_client()
        assert first.is_configured
        assert first.rate_limiter is second.rate_limiter
