import httpx
import pytest

from fetcher import FetchError, TsvFetcher

URL = "https://example.test/pub?gid=0&single=true&output=tsv"


def test_fetch_returns_text_and_busts_cache():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="a\tb\n")

    text = TsvFetcher(URL, transport=httpx.MockTransport(handler)).fetch()
    assert text == "a\tb\n"
    params = seen[0].url.params
    assert params["output"] == "tsv"
    assert params["t"].isdigit()
    assert seen[0].headers["cache-control"] == "no-cache"


def test_http_error_status_raises_fetch_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    with pytest.raises(FetchError) as exc:
        TsvFetcher(URL, transport=transport).fetch()
    assert exc.value.status_code == 404


def test_network_error_raises_fetch_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(FetchError) as exc:
        TsvFetcher(URL, transport=httpx.MockTransport(handler)).fetch()
    assert exc.value.status_code is None
