"""
Location Selector — Selection Resolver

Owns the five-slot selection path (province, district, municipality,
ward, area) and its transition rules. Both input paths, the cascading
dropdowns and search autocomplete, go through the same assignment so the
"clear everything deeper" rule lives in one place.

Every transition reports one normalized selection to the listener:

  * all-levels mode: the deepest set slot as {id, name, type};
  * area-only mode: the area slot, since only an area is a usable
    answer when posting a listing;

or ``None`` when there is nothing to report.

@file locations/selector/resolver.py
"""

import logging

from .types import LEVELS, LocationType, SelectorMode

logger = logging.getLogger('classifieds')


def _belongs_to(node, parent) -> bool:
    # Nodes parsed without parent ids (or wards without a global id)
    # cannot be checked and are accepted.
    if node.parent_id is None or parent.id is None:
        return True
    return node.parent_id == parent.id


class SelectionResolver:
    def __init__(self, on_change=None, *, mode=SelectorMode.ALL_LEVELS):
        self.mode = SelectorMode(mode)
        self._listener = on_change
        self._slots = dict.fromkeys(LEVELS)

    def __getitem__(self, level):
        return self._slots[LocationType(level)]

    @property
    def province(self):
        return self._slots[LocationType.PROVINCE]

    @property
    def district(self):
        return self._slots[LocationType.DISTRICT]

    @property
    def municipality(self):
        return self._slots[LocationType.MUNICIPALITY]

    @property
    def ward(self):
        return self._slots[LocationType.WARD]

    @property
    def area(self):
        return self._slots[LocationType.AREA]

    @property
    def path(self) -> tuple:
        return tuple(self._slots[level] for level in LEVELS)

    @property
    def ward_key(self):
        """Composite (WARD, municipality id, ward_number) key of the selected ward."""
        ward = self.ward
        return ward.key if ward is not None else None

    @property
    def deepest(self):
        for level in reversed(LEVELS):
            if self._slots[level] is not None:
                return self._slots[level]
        return None

    @property
    def selected_node(self):
        if self.mode is SelectorMode.AREA_ONLY:
            return self.area
        return self.deepest

    @property
    def selection(self) -> dict | None:
        node = self.selected_node
        return node.as_selection() if node is not None else None

    # -- transitions -------------------------------------------------------

    def set_slot(self, level, node) -> bool:
        """
        Set ``level`` to ``node`` and clear every deeper slot; ``None``
        clears the level too. Returns False, without touching state, when
        the node cannot sit at that level under the current parent.
        """
        level = LocationType(level)
        if node is not None:
            if node.type is not level:
                logger.warning('Ignoring %s node %r offered for the %s slot',
                               node.type.value, node.name, level.value)
                return False
            if level.parent is not None:
                parent = self._slots[level.parent]
                if parent is None:
                    logger.warning('Ignoring %s %r: no %s selected',
                                   level.value, node.name, level.parent.value)
                    return False
                if not _belongs_to(node, parent):
                    logger.warning('Ignoring %s %r: not under %s %r',
                                   level.value, node.name, level.parent.value, parent.name)
                    return False

        self._assign(level, node)
        self._notify()
        return True

    def select_from_search(self, result):
        """
        Put a search result straight into the slot of its type and clear
        the deeper slots. Shallower slots are left exactly as they were;
        ancestors are not backfilled.
        """
        self._assign(result.type, result)
        self._notify()

    def restore(self, node):
        """Place a caller-provided initial selection without notifying."""
        self._assign(node.type, node)

    def clear(self):
        for level in LEVELS:
            self._slots[level] = None
        self._notify()

    def _assign(self, level, node):
        self._slots[level] = node
        for deeper in LEVELS[level.depth + 1:]:
            self._slots[deeper] = None

    def _notify(self):
        if self._listener is not None:
            self._listener(self.selection)
