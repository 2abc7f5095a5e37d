from __future__ import annotations

from urllib.parse import urlparse
from typing import Optional
from datetime import datetime, timezone
from dateutil import parser as dateparser


def extract_domain(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def parse_date_to_iso(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        dt = dateparser.parse(value)
    except (ValueError, OverflowError):
        return None
    if not dt:
        return None
    if not dt.tzinfo:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def timestamp_to_iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def domain_filters(websites: list[str]) -> list[str]:
    """Strip scheme and ``www.`` so sites can be passed as include-domain filters."""
    domains: list[str] = []
    for site in websites:
        parsed = urlparse(site if "://" in site else f"https://{site}")
        host = (parsed.hostname or "").lower()
        if host.startswith("www."):
            host = host[4:]
        if not host:
            continue
        path = parsed.path.rstrip("/")
        domains.append(f"{host}{path}")
    return domains
