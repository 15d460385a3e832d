"""Web search providers and merging."""

import httpx

from cyberai.config import SearchConfig
from cyberai.schema import SearchResult
from cyberai.websearch import WebSearch, dedupe, format_search_context


def ddg_payload():
    return {"RelatedTopics": [
        {"FirstURL": "https://duckduckgo.com/Nmap", "Text": "Nmap - Network scanner"},
        {"FirstURL": "https://duckduckgo.com/NMAP", "Text": "Nmap duplicate"},
        {"Name": "Category without URL"},
        {"FirstURL": "https://duckduckgo.com/Wireshark", "Text": "Wireshark - Packet analyzer"},
    ]}


def make_search(handler, **cfg) -> WebSearch:
    base = dict(max_results=5, bing_key="", google_key="", google_cx="")
    base.update(cfg)
    return WebSearch(SearchConfig(**base), http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_duckduckgo_only_without_keys():
    hosts = []

    def handler(request):
        hosts.append(request.url.host)
        return httpx.Response(200, json=ddg_payload())

    results = make_search(handler).search("nmap")
    assert hosts == ["api.duckduckgo.com"]
    assert [r.title for r in results] == ["Nmap", "Wireshark"]
    assert all(r.source == "DuckDuckGo" for r in results)


def test_failing_provider_is_skipped():
    def handler(request):
        if request.url.host == "api.bing.microsoft.com":
            return httpx.Response(500)
        if request.url.host == "www.googleapis.com":
            return httpx.Response(200, json={"items": [
                {"title": "Nmap docs", "link": "https://nmap.org/book", "snippet": "Reference guide"},
            ]})
        return httpx.Response(200, json=ddg_payload())

    ws = make_search(handler, bing_key="b", google_key="g", google_cx="cx")
    results = ws.search("nmap", max_results=10)
    assert [r.source for r in results] == ["DuckDuckGo", "DuckDuckGo", "Google"]


def test_network_error_yields_empty():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    assert make_search(handler).search("anything") == []


def test_max_results_truncates():
    def handler(request):
        return httpx.Response(200, json=ddg_payload())

    assert len(make_search(handler).search("nmap", max_results=1)) == 1


def test_news_and_academic_rewrite_query():
    queries = []

    def handler(request):
        queries.append(request.url.params["q"])
        return httpx.Response(200, json={"RelatedTopics": []})

    ws = make_search(handler)
    ws.news("ransomware")
    ws.academic("lattice crypto")
    assert queries[0] == "ransomware news"
    assert queries[1].startswith("lattice crypto site:scholar.google.com")


def test_dedupe_and_format():
    a = SearchResult(title="A", url="https://X.org/a", snippet="one", source="Bing")
    b = SearchResult(title="B", url="https://x.org/A", snippet="two", source="Google")
    assert dedupe([a, b]) == [a]
    assert format_search_context([a]) == "Source: Bing\nTitle: A\nContent: one"


def test_duckduckgo_nested_groups_and_stray_entries():
    payload = {"RelatedTopics": [
        "not a topic",
        {"Name": "Tools", "Topics": [
            {"FirstURL": "https://duckduckgo.com/Burp", "Text": "Burp Suite - Web proxy"},
            None,
        ]},
        {"FirstURL": "https://duckduckgo.com/Nmap", "Text": "Nmap - Network scanner"},
    ]}
    results = make_search(lambda request: httpx.Response(200, json=payload)).search("scanners")
    assert [r.url for r in results] == ["https://duckduckgo.com/Burp", "https://duckduckgo.com/Nmap"]


def test_duckduckgo_unexpected_shape_yields_nothing():
    results = make_search(lambda request: httpx.Response(200, json=["odd", "shape"])).search("nmap")
    assert results == []
