"""Read-only access to the companion-planting guide."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from app.domain.plant_guide import PLANT_GUIDE, PlantGuideEntry

logger = logging.getLogger(__name__)


class PlantGuideService:
    """Lists, searches and looks up plant guide entries.

    The guide is shared by every user, so one instance lives on the
    container rather than in the per-user bundle.
    """

    def __init__(self, entries: Iterable[PlantGuideEntry] = PLANT_GUIDE):
        self._entries = tuple(entries)
        self._by_id = {entry.id: entry for entry in self._entries}
        logger.info("PlantGuideService initialized with %d entries", len(self._entries))

    def list_entries(self) -> List[PlantGuideEntry]:
        return list(self._entries)

    def search(self, query: Optional[str]) -> List[PlantGuideEntry]:
        """Entries whose name contains *query*, ignoring case. Blank matches all."""
        needle = (query or "").strip().lower()
        if not needle:
            return self.list_entries()
        return [entry for entry in self._entries if needle in entry.name.lower()]

    def get(self, plant_id: str) -> Optional[PlantGuideEntry]:
        return self._by_id.get(plant_id)
