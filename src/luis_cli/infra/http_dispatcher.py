"""``httpx`` backed implementation of :class:`~luis_cli.core.protocols.Dispatcher`.

This module is the **only** place in the codebase that imports ``httpx``.
All ``httpx`` exceptions are caught here and re-raised as
:class:`~luis_cli.exceptions.TransportError` — nothing raw escapes the
infrastructure boundary.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from luis_cli.core.models import EffectiveConfig, OperationDescriptor
from luis_cli.exceptions import ArgumentError, TransportError

logger = logging.getLogger(__name__)

AUTH_HEADER: str = "Ocp-Apim-Subscription-Key"
DEFAULT_TIMEOUT: float = 30.0

_ROUTE_PARAM = re.compile(r"\{(\w+)\}")


class HttpDispatcher:
    """Execute catalog operations against the LUIS authoring endpoint.

    Usage::

        with HttpDispatcher() as dispatcher:
            app = dispatcher.execute(config, descriptor, {"appId": "..."}, None)

    Parameters
    ----------
    client:
        Optional pre-built ``httpx.Client`` (tests pass one with a
        ``MockTransport``).  When omitted a client is created and owned
        by the dispatcher.
    timeout:
        Request timeout in seconds for an owned client.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_client: bool = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> HttpDispatcher:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this dispatcher created it."""
        if self._owns_client:
            self._client.close()

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def execute(
        self,
        config: EffectiveConfig,
        descriptor: OperationDescriptor,
        raw_args: Mapping[str, Any],
        body: Any | None,
    ) -> Any:
        """Issue the HTTP call described by *descriptor*.

        Returns
        -------
        Any
            The parsed JSON value, the raw text for non-JSON bodies, or
            ``None`` for an empty body.

        Raises
        ------
        ArgumentError
            When a route parameter has no value.
        TransportError
            On network failure, an HTTP error status, or an ``error``
            member in the response body.
        """
        url = self.build_url(config, descriptor, raw_args)
        params = {
            name: str(raw_args[name])
            for name in descriptor.query_params
            if raw_args.get(name) is not None
        }
        headers = {AUTH_HEADER: config.authoring_key or ""}

        logger.debug("%s %s params=%s", descriptor.http_method, url, params)
        try:
            response = self._client.request(
                descriptor.http_method,
                url,
                params=params or None,
                headers=headers,
                json=body,
            )
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to {url} failed: {exc}",
                hint="Check the endpoint base path and your network connection.",
            ) from exc

        logger.debug("%s %s -> HTTP %d", descriptor.http_method, url, response.status_code)
        payload = self._parse_body(response)

        if response.status_code >= 400 or _has_error_member(payload):
            raise _transport_error(response, payload)
        return payload

    # ------------------------------------------------------------------
    # URL construction (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def build_url(
        config: EffectiveConfig,
        descriptor: OperationDescriptor,
        raw_args: Mapping[str, Any],
    ) -> str:
        """Substitute percent-encoded route parameters and join with the endpoint base."""
        fallbacks = {"appId": config.app_id, "versionId": config.version_id}

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            value = raw_args.get(name) or fallbacks.get(name)
            if not value:
                raise ArgumentError(
                    f"Missing required parameter --{name}",
                    hint=f"'{' '.join(descriptor.target)}' needs --{name}.",
                )
            return quote(str(value), safe="")

        path = _ROUTE_PARAM.sub(_substitute, descriptor.path)
        base = (config.endpoint_base_path or "").rstrip("/")
        return f"{base}{path}"

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        text = response.text
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text


def _has_error_member(payload: Any) -> bool:
    return isinstance(payload, dict) and payload.get("error") is not None


def _transport_error(response: httpx.Response, payload: Any) -> TransportError:
    """Map an error response to :class:`TransportError`, keeping its message."""
    message: str | None = None
    code: str | None = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            code = error.get("code")
        elif isinstance(error, str):
            message = error
        message = message or payload.get("message")
        code = code or payload.get("code")
    elif isinstance(payload, str):
        message = payload

    if not message:
        message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    return TransportError(
        str(message),
        code=str(code) if code is not None else None,
        status_code=response.status_code,
    )
