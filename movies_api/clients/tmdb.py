"""Thin async HTTP boundary to the TMDb v3 API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from movies_api.services.errors import ProviderError, ProviderHTTPError

logger = logging.getLogger(__name__)

TMDB_API_BASE_URL = 'https://api.themoviedb.org/3'


def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop unset query parameters; everything else goes out untouched."""
    if not params:
        return {}
    return {
        key: value for key, value in params.items()
        if value is not None and value != '' and value != []
    }


class TMDBClient:
    """One GET per catalog query over a shared `httpx.AsyncClient`.

    Returns the decoded JSON object on 2xx. Raises `ProviderHTTPError`
    carrying the status for any other answer and `ProviderError` for
    transport or decode failures.
    """

    def __init__(self, http: httpx.AsyncClient, api_key: str) -> None:
        self.http = http
        self.api_key = api_key

    @classmethod
    def create(
        cls,
        api_key: str,
        base_url: str = TMDB_API_BASE_URL,
        timeout_seconds: float = 10.0,
        max_connections: int = 100,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> 'TMDBClient':
        http = httpx.AsyncClient(
            base_url=base_url.rstrip('/'),
            timeout=timeout_seconds,
            limits=httpx.Limits(max_connections=max_connections),
            headers={'accept': 'application/json'},
            transport=transport,
        )
        return cls(http, api_key)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def get_json(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        query = clean_params(params)
        query['api_key'] = self.api_key
        try:
            response = await self.http.get(path, params=query)
        except httpx.HTTPError as error:
            raise ProviderError(
                f'tmdb_transport_error: {type(error).__name__} on {path}'
            ) from error

        if not response.is_success:
            logger.warning(
                'tmdb_http_error',
                extra={'path': path, 'status': response.status_code},
            )
            raise ProviderHTTPError(
                response.status_code,
                path,
                body_snippet=(response.text or '')[:400],
            )

        try:
            payload = response.json()
        except ValueError as error:
            raise ProviderError(
                f'tmdb_decode_error: non-JSON body on {path}'
            ) from error
        if not isinstance(payload, dict):
            raise ProviderError(
                f'tmdb_decode_error: unexpected JSON shape on {path}')
        return payload
