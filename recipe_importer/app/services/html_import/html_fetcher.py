"""HTML fetching and URL validation utilities."""

import ipaddress
import json
import logging
import re
from typing import Optional
from urllib.parse import urlparse

import httpx

from recipe_importer.app.core.config import get_settings

logger = logging.getLogger(__name__)


def is_private_host(host: str) -> bool:
    """Check if a host is private/localhost."""
    hostname = host.split(":")[0]
    try:
        ip = ipaddress.ip_address(hostname)
        return ip.is_private or ip.is_loopback
    except ValueError:
        return hostname.lower() in {"localhost"}


def validate_url(url: str) -> None:
    parsed_url = urlparse(url or "")
    if parsed_url.scheme not in {"http", "https"} or not parsed_url.netloc:
        raise ValueError("Invalid URL")
    if is_private_host(parsed_url.hostname or ""):
        raise ValueError("URL points to a private or disallowed host")


def _load_cookies(raw: Optional[str]) -> dict:
    if not raw:
        return {}
    try:
        cookies = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("SCRAPER_COOKIES is not valid JSON; ignoring")
        return {}
    return cookies if isinstance(cookies, dict) else {}


def _decode_response(response: httpx.Response) -> str:
    content_type = response.headers.get("content-type", "")
    encoding = None
    if "charset=" in content_type.lower():
        try:
            encoding = content_type.split("charset=")[1].split(";")[0].strip().strip("\"'")
        except (IndexError, AttributeError):
            pass

    content_bytes = response.content
    try:
        return content_bytes.decode(encoding or "utf-8")
    except (UnicodeDecodeError, LookupError):
        text = content_bytes.decode("utf-8", errors="replace")
        encoding_match = re.search(r'<meta[^>]+charset=["\']?([^"\'>\s]+)', text, re.I)
        if encoding_match:
            detected_encoding = encoding_match.group(1).lower()
            if detected_encoding and detected_encoding != "utf-8":
                try:
                    return content_bytes.decode(detected_encoding)
                except (UnicodeDecodeError, LookupError):
                    pass
        return text


async def fetch_html(url: str) -> str:
    """Fetch HTML content from a URL, retrying once with relaxed headers when blocked."""
    validate_url(url)
    settings = get_settings()
    if not settings.recipe_http_fetch_enabled:
        raise ValueError("HTTP fetch disabled")

    headers = {
        "User-Agent": settings.scraper_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Referer": "https://www.google.com/",
        "Connection": "keep-alive",
    }
    cookies = _load_cookies(settings.scraper_cookies)
    timeout = httpx.Timeout(
        settings.recipe_fetch_timeout_seconds,
        connect=min(5.0, settings.recipe_fetch_timeout_seconds),
    )

    async def _try_fetch(extra_headers: Optional[dict] = None) -> httpx.Response:
        merged_headers = headers | (extra_headers or {})
        async with httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, headers=merged_headers, cookies=cookies
        ) as client:
            return await client.get(url)

    try:
        response = await _try_fetch()
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code not in {401, 403}:
            raise
        logger.info("Fetch of %s blocked with %s; retrying", url, exc.response.status_code)
        response = await _try_fetch({"Accept": "*/*"})
        response.raise_for_status()

    content_type = response.headers.get("content-type", "")
    if content_type and "text/html" not in content_type and "application/xhtml" not in content_type:
        raise ValueError(f"Unsupported content type: {content_type}")

    text = _decode_response(response)
    logger.info("Fetched %s (%d chars)", url, len(text))
    return text
