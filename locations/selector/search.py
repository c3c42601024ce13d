"""
Location Selector — Search Autocomplete

Debounced free-text search over the hierarchy cache.

Keystrokes restart a quiescence timer; only when it lapses is a query
issued. Each issued query takes the next sequence number and its
results are applied only if that number is still the latest issued, so
a slow response for an old query can never overwrite a newer one.

@file locations/selector/search.py
"""

import asyncio
import logging

from core.constants import SEARCH_DEBOUNCE_SECONDS

from .exceptions import FetchError

logger = logging.getLogger('classifieds')


class LocationAutocomplete:
    def __init__(self, cache, *, debounce_seconds=SEARCH_DEBOUNCE_SECONDS):
        self.cache = cache
        self.debounce_seconds = debounce_seconds
        self.term = ''
        self.results = []
        self.is_open = False
        self.is_searching = False
        self.error = None
        self._issued = 0
        self._timer = None
        self._tasks = set()
        self._closed = False

    @property
    def issued(self) -> int:
        """Sequence number of the latest issued query."""
        return self._issued

    def on_input(self, text):
        """Record a keystroke and (re)start the debounce window."""
        if self._closed:
            return
        self.term = text
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce_seconds, self._fire, text)

    def _fire(self, text):
        self._timer = None
        self.submit(text)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def submit(self, query):
        """Issue ``query`` now, bypassing the debounce window."""
        self._issued += 1
        task = asyncio.ensure_future(self._run(query, self._issued))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_current(self, seq) -> bool:
        return not self._closed and seq == self._issued

    async def _run(self, query, seq):
        if len((query or '').strip()) < self.cache.min_query_length:
            if self._is_current(seq):
                self.results = []
                self.is_open = False
                self.is_searching = False
            return

        self.is_searching = True
        try:
            results = await self.cache.search(query)
        except FetchError as exc:
            logger.warning('Location search for %r failed: %s', query, exc)
            if self._is_current(seq):
                self.results = []
                self.error = str(exc)
                self.is_open = False
                self.is_searching = False
            return

        if not self._is_current(seq):
            logger.debug('Discarding stale results for %r (query #%d, latest #%d)',
                         query, seq, self._issued)
            return
        self.results = results
        self.error = None
        self.is_open = True
        self.is_searching = False

    async def wait_idle(self):
        """Wait out the pending debounce window and every in-flight query."""
        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(self.debounce_seconds)

    def focus(self):
        if self.results:
            self.is_open = True

    def blur(self):
        self.is_open = False

    def select(self, result):
        """A result was picked: show its name and drop the ephemeral results."""
        self._cancel_timer()
        self._issued += 1
        self.term = result.name
        self.results = []
        self.is_open = False
        self.is_searching = False

    def reset(self):
        self._cancel_timer()
        self._issued += 1
        self.term = ''
        self.results = []
        self.is_open = False
        self.is_searching = False
        self.error = None

    def close(self):
        self._cancel_timer()
        self._closed = True
