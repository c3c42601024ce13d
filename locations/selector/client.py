"""
Location Selector — HTTP Client

Async client for the location-hierarchy endpoints (locations/views.py).
Every response is the standard {success, data} envelope; anything else,
and every transport or HTTP error, surfaces as FetchError.

@file locations/selector/client.py
"""

import logging

import httpx

from .exceptions import FetchError

logger = logging.getLogger('classifieds')


class LocationServiceClient:
    """
    Thin wrapper around ``httpx.AsyncClient``.

    Returns the raw ``data`` member of each response; turning it into
    nodes is the hierarchy cache's job.
    """

    def __init__(self, base_url: str, *, timeout: float = 10.0, transport=None):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=min(timeout, 5.0)),
            headers={'Accept': 'application/json'},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, **kwargs):
        from django.conf import settings

        conf = settings.LOCATION_SELECTOR
        kwargs.setdefault('timeout', conf.get('TIMEOUT', 10.0))
        return cls(conf['BASE_URL'], **kwargs)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _get(self, path: str, params: dict | None = None):
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.TimeoutException as exc:
            raise FetchError(f'Location service timed out on {path}') from exc
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f'Location service HTTP error {exc.response.status_code} on {path}',
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f'Location service unreachable: {exc}') from exc
        except ValueError as exc:
            raise FetchError(f'Location service returned invalid JSON on {path}') from exc

        if not isinstance(payload, dict) or not payload.get('success') or 'data' not in payload:
            raise FetchError(f'Unexpected response envelope from {path}')
        return payload['data']

    async def get_hierarchy(self, province_id=None):
        params = {'province_id': province_id} if province_id is not None else None
        return await self._get('hierarchy/', params)

    async def get_areas_hierarchy(self, province_id=None):
        params = {'province_id': province_id} if province_id is not None else None
        return await self._get('areas/hierarchy/', params)

    async def search_all_locations(self, query: str):
        return await self._get('search/', {'q': query})

    async def search_areas(self, query: str):
        return await self._get('areas/search/', {'q': query})

    async def get_location(self, location_id):
        return await self._get(f'{location_id}/node/')
