"""
Base HTTP client with timeout enforcement, retry, and typed error classification.

Subclasses decide which headers to send, which error type a failed response
becomes, and which failures are worth another attempt. The attempt loop,
URL building, timeout plumbing and backoff live here.
"""

import asyncio
import json
import logging
import random
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from outbound.config import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT_MS
from outbound.logging.safe_logging import redact_headers

logger = logging.getLogger(__name__)

INITIAL_RETRY_DELAY_MS = 1_000
MAX_RETRY_DELAY_MS = 30_000
RETRY_JITTER_RATIO = 0.25

ParamValue = str | int | float | bool | None


@dataclass
class RequestOptions:
    """Per-call overrides.

    Attributes:
        timeout_ms: Replaces the client timeout for every attempt of this call.
        no_retry: Make exactly one attempt.
        headers: Merged over the client's default headers.
        params: Query parameters; ``None`` values are omitted.
    """

    timeout_ms: int | float | None = None
    no_retry: bool = False
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, ParamValue] | None = None


@dataclass
class RequestContext:
    """State for one logical request, shared by all of its attempts."""

    method: str
    url: str
    attempt: int = 0
    start_time: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)


def _param_to_str(value: ParamValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(
    base_url: str,
    path: str,
    params: Mapping[str, ParamValue] | None = None,
    drop_empty: bool = False,
) -> str:
    """Resolve ``path`` against ``base_url`` and append query parameters.

    Args:
        base_url: API root, e.g. ``https://app.outboundsolutions.com``.
        path: Relative or absolute path (``/api/campaigns``).
        params: Query values; ``None`` entries are skipped.
        drop_empty: Also skip empty-string values.

    Returns:
        str: The absolute URL.
    """
    url = httpx.URL(base_url).join(path)
    if params:
        query = {
            key: _param_to_str(value)
            for key, value in params.items()
            if value is not None and not (drop_empty and value == "")
        }
        if query:
            url = url.copy_merge_params(query)
    return str(url)


def compute_retry_delay(
    attempt: int,
    initial_delay_ms: float = INITIAL_RETRY_DELAY_MS,
    max_delay_ms: float = MAX_RETRY_DELAY_MS,
    rng: Callable[[], float] = random.random,
) -> float:
    """Backoff in milliseconds after failed attempt number ``attempt`` (1-based).

    Exponential from ``initial_delay_ms``, capped at ``max_delay_ms``, plus
    0-25% jitter on top. Jitter never shortens the delay.
    """
    capped = min(initial_delay_ms * (2 ** (attempt - 1)), max_delay_ms)
    return capped + capped * rng() * RETRY_JITTER_RATIO


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class BaseApiClient:
    """
    Base async HTTP client for upstream JSON APIs.

    Features:
    - Per-attempt timeout (asyncio + httpx) surfaced as the client's timeout error
    - Automatic retry with exponential backoff and jitter for retryable failures
    - Subclass hooks for default headers and error classification
    - Optional request logging when ``debug`` is on

    The instance holds configuration only. Each logical request opens its own
    ``httpx.AsyncClient`` and closes it when the request completes.
    """

    #: Prefix for debug log lines.
    log_prefix = "[api]"
    #: Exception type this client raises for classified failures.
    error_class: type[Exception] = Exception
    #: Also drop ``""`` query values.
    drop_empty_params = False

    def __init__(
        self,
        base_url: str,
        timeout_ms: int | float = DEFAULT_TIMEOUT_MS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        debug: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout_ms = timeout_ms
        self.max_retries = max_retries
        self.debug = debug
        self._transport = transport

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def _default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def _error_from_response(self, status_code: int, body: Any) -> Exception:
        raise NotImplementedError

    def _timeout_error(self, timeout_ms: int | float) -> Exception:
        raise NotImplementedError

    def _network_error(self, exc: httpx.TransportError) -> Exception:
        raise NotImplementedError

    def _is_retryable(self, error: Exception) -> bool:
        return False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _log(self, message: str, *args: Any, **extra: Any) -> None:
        if self.debug:
            extra["client"] = self.log_prefix.strip("[]")
            logger.info("%s " + message, self.log_prefix, *args, extra=extra)

    def _classify(self, exc: Exception, timeout_ms: int | float) -> Exception | None:
        """Map any exception raised by an attempt to this client's error type.

        Returns None for exceptions that are not transport or HTTP failures;
        those are re-raised unchanged by the caller.
        """
        if isinstance(exc, self.error_class):
            return exc
        if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
            return self._timeout_error(timeout_ms)
        if isinstance(exc, httpx.TransportError):
            return self._network_error(exc)
        return None

    def _max_attempts(self, options: RequestOptions) -> int:
        if options.no_retry:
            return 1
        return max(1, self.max_retries)

    def build_headers(self, extra: Mapping[str, str] | None = None) -> httpx.Headers:
        headers = httpx.Headers(self._default_headers())
        if extra:
            headers.update(extra)
        return headers

    async def _wait(self, delay_ms: float) -> None:
        await asyncio.sleep(delay_ms / 1000)

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> Any:
        """
        Execute one logical request, retrying transient failures.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: Path resolved against the base URL
            body: JSON-serializable payload, sent when not None
            options: Per-call overrides

        Returns:
            Parsed JSON body, or None for 204 No Content

        Raises:
            The client's error type for the first non-retryable failure, or the
            last failure once the attempt budget is spent. Exceptions that are
            neither HTTP nor transport failures propagate unchanged.
        """
        options = options or RequestOptions()
        timeout_ms = options.timeout_ms if options.timeout_ms is not None else self.timeout_ms
        max_attempts = self._max_attempts(options)
        headers = self.build_headers(options.headers)

        ctx = RequestContext(
            method=method.upper(),
            url=build_url(self.base_url, path, options.params, self.drop_empty_params),
        )

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=timeout_ms / 1000,
            follow_redirects=True,
        ) as http:
            for attempt in range(1, max_attempts + 1):
                ctx.attempt = attempt
                try:
                    return await self._attempt(http, ctx, headers, body, timeout_ms, max_attempts)
                except Exception as exc:
                    error = self._classify(exc, timeout_ms)
                    if error is None:
                        raise
                    if attempt >= max_attempts or not self._is_retryable(error):
                        if error is exc:
                            raise
                        raise error from exc

                    delay_ms = compute_retry_delay(attempt)
                    self._log(
                        "%s %s attempt %d/%d failed (%s). Retrying in %.0fms",
                        ctx.method,
                        ctx.url,
                        attempt,
                        max_attempts,
                        error,
                        delay_ms,
                    )
                    await self._wait(delay_ms)

        raise self._network_error(httpx.TransportError("Request failed after retries"))

    async def _attempt(
        self,
        http: httpx.AsyncClient,
        ctx: RequestContext,
        headers: httpx.Headers,
        body: Any,
        timeout_ms: int | float,
        max_attempts: int,
    ) -> Any:
        self._log(
            "%s %s (attempt %d/%d)",
            ctx.method,
            ctx.url,
            ctx.attempt,
            max_attempts,
            method=ctx.method,
            url=ctx.url,
            attempt=ctx.attempt,
            headers=redact_headers(headers),
        )

        try:
            response = await asyncio.wait_for(
                http.request(ctx.method, ctx.url, headers=headers, json=body),
                timeout=timeout_ms / 1000,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            self._log("%s %s timed out after %sms", ctx.method, ctx.url, timeout_ms)
            raise
        except httpx.TransportError as exc:
            self._log("%s %s network error: %s (%dms)", ctx.method, ctx.url, exc, ctx.elapsed_ms())
            raise

        duration_ms = ctx.elapsed_ms()

        if not response.is_success:
            error_body = _safe_json(response)
            self._log(
                "%s %s failed: %d (%dms) body: %s",
                ctx.method,
                ctx.url,
                response.status_code,
                duration_ms,
                json.dumps(error_body, default=str),
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            raise self._error_from_response(response.status_code, error_body)

        self._log(
            "%s %s succeeded: %d (%dms)",
            ctx.method,
            ctx.url,
            response.status_code,
            duration_ms,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        if response.status_code == 204:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Read shortcut
    # ------------------------------------------------------------------

    async def get(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self.request("GET", path, None, options)

