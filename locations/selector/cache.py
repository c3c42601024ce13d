"""
Location Selector — Hierarchy Cache

Owns the partially materialised location tree and mediates every call to
the location service. Provinces are fetched eagerly; a province's
district → municipality → ward → area subtree is fetched on its first
expansion. Concurrent loads of the same thing share one request.

All mutation happens on the event loop between awaits, so no locking is
needed. After ``close()`` late completions are returned to whoever
awaited them but never applied to the tree.

@file locations/selector/cache.py
"""

import asyncio
import logging

from core.constants import SEARCH_MIN_LENGTH

from .exceptions import FetchError, LocationNotLoadedError, SelectorError
from .types import (
    LocationType,
    SelectorMode,
    parse_province,
    parse_province_subtree,
    parse_search_result,
)

logger = logging.getLogger('classifieds')

# Raised by the parsers on a payload that does not have the expected shape.
MALFORMED_PAYLOAD_ERRORS = (KeyError, TypeError, ValueError)


def _consume_exception(task):
    # Every awaiting caller may have been cancelled; the failure is still
    # read so asyncio does not report it as never retrieved.
    if not task.cancelled():
        task.exception()


def _spawn(coro):
    task = asyncio.ensure_future(coro)
    task.add_done_callback(_consume_exception)
    return task


class HierarchyCache:
    def __init__(self, service, mode=SelectorMode.AREA_ONLY, *, min_query_length=SEARCH_MIN_LENGTH):
        self.service = service
        self.mode = SelectorMode(mode)
        self.min_query_length = min_query_length
        self.provinces = None
        self._root_task = None
        self._expansions = {}
        self._closed = False

    @property
    def area_only(self) -> bool:
        return self.mode is SelectorMode.AREA_ONLY

    @property
    def is_loaded(self) -> bool:
        return self.provinces is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self):
        if self._closed:
            raise SelectorError('Hierarchy cache is closed')

    def get_province(self, province_id):
        """Look a province up in the loaded root. Raises LocationNotLoadedError."""
        for province in self.provinces or []:
            if province.id == province_id:
                return province
        raise LocationNotLoadedError(f'Province {province_id} is not in the loaded hierarchy')

    # -- root --------------------------------------------------------------

    async def load_root(self):
        """
        Return the province roots (children not loaded).

        Once loaded the cached list is returned as-is; while a load is in
        flight every caller awaits the same request. On FetchError the
        cache stays empty and a later call retries.
        """
        self._ensure_open()
        if self.provinces is not None:
            return self.provinces
        if self._root_task is None:
            self._root_task = _spawn(self._fetch_root())
        return await asyncio.shield(self._root_task)

    async def _fetch_root(self):
        try:
            if self.area_only:
                payload = await self.service.get_areas_hierarchy()
            else:
                payload = await self.service.get_hierarchy()
            try:
                provinces = [parse_province(p) for p in payload or []]
            except MALFORMED_PAYLOAD_ERRORS as exc:
                raise FetchError('Malformed hierarchy payload') from exc
        finally:
            self._root_task = None

        if self._closed:
            logger.debug('Discarding root hierarchy received after teardown')
            return provinces
        self.provinces = provinces
        logger.debug('Loaded %d provinces (%s)', len(provinces), self.mode.value)
        return provinces

    # -- expansion ---------------------------------------------------------

    async def expand_province(self, province_id):
        """
        Load one province's subtree, replacing any previous one. Area-only
        mode asks for the area-pruned tree; all-levels mode for the full one
        so branches without areas stay selectable.

        No-op when ``districts`` is already present, including an empty
        list the service confirmed. Raises FetchError and leaves the
        province unexpanded on failure.
        """
        self._ensure_open()
        province = self.get_province(province_id)
        if province.districts is not None:
            return province

        task = self._expansions.get(province.id)
        if task is None:
            task = _spawn(self._fetch_province(province))
            self._expansions[province.id] = task
        return await asyncio.shield(task)

    async def _fetch_province(self, province):
        try:
            if self.area_only:
                payload = await self.service.get_areas_hierarchy(province.id)
            else:
                payload = await self.service.get_hierarchy(province.id)
            try:
                districts = parse_province_subtree(payload, province.id)
            except MALFORMED_PAYLOAD_ERRORS as exc:
                raise FetchError(f'Malformed subtree payload for province {province.id}') from exc
        finally:
            self._expansions.pop(province.id, None)

        if self._closed:
            logger.debug('Discarding subtree of province %s received after teardown', province.id)
            return province
        province.districts = districts
        logger.debug('Expanded province %s: %d districts', province.id, len(districts))
        return province

    def is_expanding(self, province_id) -> bool:
        return province_id in self._expansions

    # -- search ------------------------------------------------------------

    async def search(self, query):
        """
        Substring lookup. Queries shorter than ``min_query_length`` after
        trimming return [] without touching the service.
        """
        query = (query or '').strip()
        if len(query) < self.min_query_length:
            return []

        if self.area_only:
            payload = await self.service.search_areas(query)
        else:
            payload = await self.service.search_all_locations(query)

        try:
            results = [parse_search_result(r) for r in payload or []]
        except MALFORMED_PAYLOAD_ERRORS as exc:
            raise FetchError('Malformed search payload') from exc

        if self.area_only:
            results = [r for r in results if r.type is LocationType.AREA]
        return results

    async def resolve(self, location_id):
        """Fetch a single node (with hierarchy_info) by id."""
        payload = await self.service.get_location(location_id)
        try:
            return parse_search_result(payload)
        except MALFORMED_PAYLOAD_ERRORS as exc:
            raise FetchError(f'Malformed payload for location {location_id}') from exc

    def close(self):
        self._closed = True
