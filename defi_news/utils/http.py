
import httpx
from typing import Dict, Optional


def default_headers(api_key: str) -> Dict[str, str]:
    return {
        "User-Agent": "defi-news-mcp/1.0 (+https://example.local)",
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def build_async_client(
    api_key: str,
    timeout_seconds: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    timeout = httpx.Timeout(timeout_seconds)
    return httpx.AsyncClient(
        timeout=timeout,
        headers=default_headers(api_key),
        follow_redirects=True,
        transport=transport,
    )
