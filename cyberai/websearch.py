from typing import Callable, Iterator, List, Optional

import httpx
import structlog

from .config import SearchConfig
from .schema import SearchResult

log = structlog.get_logger(__name__)

DDG_URL = "https://api.duckduckgo.com/"
BING_URL = "https://api.bing.microsoft.com/v7.0/search"
GOOGLE_URL = "https://www.googleapis.com/customsearch/v1"


def format_search_context(results: List[SearchResult]) -> str:
    return "\n\n".join(f"Source: {r.source}\nTitle: {r.title}\nContent: {r.snippet}" for r in results)


def _flatten_topics(topics) -> Iterator[dict]:
    """DuckDuckGo nests categories as {"Name", "Topics": [...]}; anything not a dict is skipped."""
    for topic in topics if isinstance(topics, list) else []:
        if not isinstance(topic, dict):
            continue
        if isinstance(topic.get("Topics"), list):
            yield from _flatten_topics(topic["Topics"])
        else:
            yield topic


def dedupe(results: List[SearchResult]) -> List[SearchResult]:
    seen, out = set(), []
    for r in results:
        key = r.url.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(r)
    return out


class WebSearch:
    """
    Multi-provider web search.

    DuckDuckGo's instant-answer API needs no key and is always queried;
    Bing and Google Custom Search join in when their keys are configured.
    A provider that fails contributes nothing instead of failing the search.
    """
    def __init__(self, cfg: Optional[SearchConfig] = None, http_client: Optional[httpx.Client] = None):
        self.cfg = cfg or SearchConfig()
        self.client = http_client or httpx.Client(timeout=self.cfg.timeout_s)

    def _providers(self) -> List[Callable[[str, int], List[SearchResult]]]:
        providers = [self._duckduckgo]
        if self.cfg.bing_key:
            providers.append(self._bing)
        if self.cfg.google_key and self.cfg.google_cx:
            providers.append(self._google)
        return providers

    def search(self, query: str, max_results: int = 10) -> List[SearchResult]:
        merged: List[SearchResult] = []
        for provider in self._providers():
            try:
                merged.extend(provider(query, max_results))
            except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
                log.warning("search.provider_failed", provider=provider.__name__.lstrip("_"), error=str(e))
        results = dedupe(merged)[:max_results]
        log.info("search.done", query=query, hits=len(results))
        return results

    def news(self, query: str, max_results: int = 5) -> List[SearchResult]:
        return self.search(f"{query} news", max_results)

    def academic(self, query: str, max_results: int = 5) -> List[SearchResult]:
        q = f"{query} site:scholar.google.com OR site:arxiv.org OR site:pubmed.ncbi.nlm.nih.gov"
        return self.search(q, max_results)

    # ---------- providers ----------
    def _duckduckgo(self, query: str, max_results: int) -> List[SearchResult]:
        r = self.client.get(DDG_URL, params={"q": query, "format": "json", "no_html": 1, "skip_disambig": 1})
        r.raise_for_status()
        out: List[SearchResult] = []
        for topic in _flatten_topics(r.json().get("RelatedTopics") or []):
            if len(out) >= max_results:
                break
            url, text = topic.get("FirstURL"), topic.get("Text")
            if url and text:
                out.append(SearchResult(
                    title=text.split(" - ")[0] or "DuckDuckGo Result",
                    url=url,
                    snippet=text,
                    source="DuckDuckGo",
                ))
        return out

    def _bing(self, query: str, max_results: int) -> List[SearchResult]:
        r = self.client.get(BING_URL, params={"q": query, "count": max_results},
                            headers={"Ocp-Apim-Subscription-Key": self.cfg.bing_key})
        r.raise_for_status()
        pages = (r.json().get("webPages") or {}).get("value") or []
        return [SearchResult(title=p["name"], url=p["url"], snippet=p.get("snippet", ""), source="Bing")
                for p in pages]

    def _google(self, query: str, max_results: int) -> List[SearchResult]:
        r = self.client.get(GOOGLE_URL, params={
            "key": self.cfg.google_key, "cx": self.cfg.google_cx, "q": query, "num": min(max_results, 10),
        })
        r.raise_for_status()
        return [SearchResult(title=i["title"], url=i["link"], snippet=i.get("snippet", ""), source="Google")
                for i in r.json().get("items") or []]

    def close(self):
        self.client.close()
