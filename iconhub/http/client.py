# iconhub/http/client.py
from __future__ import annotations
import asyncio
import logging
import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

logger = logging.getLogger(__name__)

__all__ = ["HTTPError", "RETRYABLE_STATUSES", "request"]

RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})



class HTTPError(Exception):
    """A retryable status was still returned after the last attempt."""
    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP {status}: {body[:200]}")
        self.status = status
        self.body = body



def _parseRetryAfter(value: str | None) -> float | None:
    """Seconds to wait according to a Retry-After header (delta-seconds or HTTP-date)."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())
    return seconds if seconds >= 0 else None



def _shouldRetry(status: int) -> bool:
    return status in RETRYABLE_STATUSES



def _backoffMs(attempt: int, baseMs: int, maxMs: int) -> float:
    """baseMs * 2**attempt, capped at maxMs, with +-25% jitter."""
    delay = min(maxMs, baseMs * (2 ** attempt))
    return max(0.0, delay + random.uniform(-delay / 4, delay / 4))



def _toResult(resp: httpx.Response) -> dict[str, Any]:
    result: dict[str, Any] = {
        "status": resp.status_code,
        "headers": dict(resp.headers),
        "text": resp.text,
        "content": resp.content,
    }
    if "json" in resp.headers.get("Content-Type", "").lower():
        try:
            result["json"] = resp.json()
        except ValueError:
            logger.debug("Response from %s claims JSON but does not parse", resp.request.url)
    return result



async def request(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    timeoutMs: int = 30_000,
    retries: int = 2,
    backoffBaseMs: int = 250,
    backoffMaxMs: int = 1_000,
    followRedirects: bool = True,
) -> dict[str, Any]:
    """
    Sends one request, retrying transport errors and RETRYABLE_STATUSES up to
    `retries` more times. Retry-After wins over the computed backoff.

    Returns {"status", "headers", "text", "content"} plus "json" when the
    response is declared as JSON and parses. Other 4xx responses are returned
    as-is; the caller decides what a 404 means.

    Raises HTTPError when the last attempt still got a retryable status, and
    re-raises the httpx.HTTPError of the last attempt for transport failures.
    """
    method = method.upper()
    retries = max(0, retries)
    timeout = httpx.Timeout(max(1, timeoutMs) / 1_000)

    async with httpx.AsyncClient(timeout=timeout, follow_redirects=followRedirects) as cli:
        for attempt in range(retries + 1):
            lastAttempt = attempt == retries
            try:
                resp = await cli.request(method, url, headers=headers, params=params)
            except httpx.HTTPError as err:
                if lastAttempt:
                    logger.warning("%s %s gave up after %d attempt(s): %s", method, url, attempt + 1, err)
                    raise
                delayMs = _backoffMs(attempt, backoffBaseMs, backoffMaxMs)
                logger.debug("%s %s: %s, retry in %.0fms", method, url, err, delayMs)
                await asyncio.sleep(delayMs / 1_000)
                continue

            if not _shouldRetry(resp.status_code):
                logger.debug("%s %s -> %d (%d bytes)", method, url, resp.status_code, len(resp.content))
                return _toResult(resp)

            if lastAttempt:
                raise HTTPError(resp.status_code, resp.text)
            retryAfter = _parseRetryAfter(resp.headers.get("Retry-After"))
            delayMs = retryAfter * 1_000 if retryAfter is not None else _backoffMs(attempt, backoffBaseMs, backoffMaxMs)
            logger.debug("%s %s -> %d, retry in %.0fms", method, url, resp.status_code, delayMs)
            await asyncio.sleep(delayMs / 1_000)

    raise AssertionError("unreachable")
