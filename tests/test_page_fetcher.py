"""Tests for URL normalization, the GET and the robots.txt / sitemap.xml probes."""

import asyncio

import httpx
import pytest

from seo_checker.exceptions import FetchError, InputError
from seo_checker.services.collectors.probe_collector import ProbeCollector
from seo_checker.services.page_fetcher import PageFetcher
from seo_checker.services.ssrf_protection import SSRFProtection


HTML = "<html><head><title>Hi</title></head><body><h1>Hi</h1></body></html>"


def make_handler(get_status=200, robots_status=200, sitemap_status=404, probe_error=None):
    """Build a MockTransport handler serving one page plus the two probe paths."""
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "HEAD":
            if probe_error is not None:
                raise probe_error("probe failed", request=request)
            if request.url.path == "/robots.txt":
                return httpx.Response(robots_status)
            if request.url.path == "/sitemap.xml":
                return httpx.Response(sitemap_status)
            return httpx.Response(404)
        return httpx.Response(
            get_status,
            headers={"Content-Type": "text/html", "ETag": '"v1"'},
            text=HTML,
        )
    return handler


def make_fetcher(handler) -> PageFetcher:
    return PageFetcher(transport=httpx.MockTransport(handler), ssrf_check=False)


# ===========================================================================
# 1. Normalization
# ===========================================================================
class TestNormalizeUrl:

    @pytest.mark.parametrize("raw, expected", [
        ("example.com", "https://example.com/"),
        ("EXAMPLE.com/Path", "https://example.com/Path"),
        ("http://example.com/a?b=1#frag", "http://example.com/a?b=1"),
        ("https://example.com/?utm_source=news&id=7&fbclid=x", "https://example.com/?id=7"),
        ("https://www.example.com:8443/", "https://www.example.com:8443/"),
        ("  https://example.com  ", "https://example.com/"),
        ("a" * 63 + ".com", "https://" + "a" * 63 + ".com/"),
        ("https://bücher.de/", "https://bücher.de/"),
    ])
    def test_valid_urls(self, raw, expected):
        assert PageFetcher.normalize_url(raw) == expected

    @pytest.mark.parametrize("raw", [
        "",
        "   ",
        "ftp://example.com/file",
        "https://",
        "https://exa mple.com/",
        "https://example.com:99999/",
        "https://bad_host!/",
        "a" * 64 + ".com",
        "https://sub." + "b" * 70 + ".example.com/",
        "１２.com",
    ])
    def test_invalid_urls_raise_input_error(self, raw):
        with pytest.raises(InputError):
            PageFetcher.normalize_url(raw)

    def test_base_url(self):
        assert PageFetcher.base_url("https://example.com/a/b?c=1") == "https://example.com"


# ===========================================================================
# 2. Fetch
# ===========================================================================
class TestFetch:

    async def test_fetch_returns_document_with_probes(self):
        fetcher = make_fetcher(make_handler())
        document = await fetcher.fetch("example.com/page?utm_campaign=x")

        assert document.url == "https://example.com/page"
        assert document.final_url == "https://example.com/page"
        assert document.html == HTML
        assert document.headers["etag"] == '"v1"'
        assert document.robots_txt_exists is True
        assert document.sitemap_xml_exists is False
        assert document.fetch_latency_ms >= 0

    async def test_non_2xx_is_fetch_error_with_status(self):
        fetcher = make_fetcher(make_handler(get_status=503))
        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch("https://example.com/")
        assert exc_info.value.upstream_status == 503
        assert exc_info.value.status_code == 400

    async def test_network_error_is_fetch_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError):
            await make_fetcher(handler).fetch("https://example.com/")

    async def test_timeout_is_fetch_error(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(FetchError, match="Timed out"):
            await make_fetcher(handler).fetch("https://example.com/")

    async def test_probe_failure_means_absent(self):
        fetcher = make_fetcher(make_handler(probe_error=httpx.ConnectTimeout))
        document = await fetcher.fetch("https://example.com/")
        assert document.robots_txt_exists is False
        assert document.sitemap_xml_exists is False

    async def test_redirect_reports_final_url(self):
        def handler(request):
            if request.method == "HEAD":
                return httpx.Response(404)
            if request.url.scheme == "http":
                return httpx.Response(301, headers={"Location": "https://example.com/"})
            return httpx.Response(200, text=HTML)

        document = await make_fetcher(handler).fetch("http://example.com/")
        assert document.url == "http://example.com/"
        assert document.final_url == "https://example.com/"

    async def test_ssrf_blocks_loopback(self):
        fetcher = PageFetcher(transport=httpx.MockTransport(make_handler()), ssrf_check=True)
        with pytest.raises(InputError):
            await fetcher.fetch("http://127.0.0.1/")
        with pytest.raises(InputError):
            await fetcher.fetch("http://localhost/")

    async def test_malformed_url_never_hits_network(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, text=HTML)

        with pytest.raises(InputError):
            await make_fetcher(handler).fetch("ftp://example.com/file")
        assert calls == []


class TestProbeCollector:

    async def test_probe_statuses(self):
        collector = ProbeCollector(transport=httpx.MockTransport(make_handler(robots_status=200, sitemap_status=200)))
        result = await collector.collect("https://example.com")
        assert result.robots_txt.exists and result.robots_txt.url == "https://example.com/robots.txt"
        assert result.sitemap_xml.exists and result.sitemap_xml.url == "https://example.com/sitemap.xml"

    async def test_server_error_is_absent(self):
        collector = ProbeCollector(transport=httpx.MockTransport(make_handler(robots_status=500)))
        result = await collector.probe("https://example.com/robots.txt")
        assert result.exists is False
        assert result.status_code == 500

    async def test_unencodable_host_is_absent(self):
        collector = ProbeCollector(transport=httpx.MockTransport(make_handler()))
        result = await collector.probe("https://１２.com/robots.txt")
        assert result.exists is False
        assert result.error is not None


class TestInvalidHosts:

    def test_ssrf_check_rejects_overlong_label(self):
        is_safe, reason = SSRFProtection.validate_url("https://" + "a" * 64 + ".com/")
        assert is_safe is False
        assert "Invalid hostname" in reason

    async def test_get_with_unencodable_host_is_fetch_error(self):
        with pytest.raises(FetchError):
            await make_fetcher(make_handler())._get("https://１２.com/")

    async def test_failed_get_leaves_no_pending_probes(self):
        with pytest.raises(FetchError):
            await make_fetcher(make_handler(get_status=500)).fetch("https://example.com/")
        pending = [task for task in asyncio.all_tasks() if task is not asyncio.current_task()]
        assert pending == []
