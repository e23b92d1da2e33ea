"""
HandStake Region Registry.
The arena of interactive regions the UI layer registers by id.
Bounds are never cached here; every lookup goes through the provider.
"""
import itertools
import logging
from typing import Dict, List, Tuple

from handstake.core.types import BoundsProvider, InteractiveRegion

logger = logging.getLogger(__name__)


class RegionRegistry:
    """
    Flat, ordered set of InteractiveRegions.

    Precedence: higher `priority` first, then registration order.
    Re-registering an existing id swaps the provider but keeps its slot.
    """
    def __init__(self):
        self._regions: Dict[str, Tuple[int, InteractiveRegion]] = {}
        self._seq = itertools.count()

    def register(self, region_id: str, bounds_provider: BoundsProvider, priority: int = 0) -> None:
        region = InteractiveRegion(region_id, bounds_provider, priority)
        if region_id in self._regions:
            seq, _ = self._regions[region_id]
        else:
            seq = next(self._seq)
            logger.debug("Region registered: %s (priority=%d)", region_id, priority)
        self._regions[region_id] = (seq, region)

    def unregister(self, region_id: str) -> None:
        if self._regions.pop(region_id, None) is not None:
            logger.debug("Region unregistered: %s", region_id)

    def clear(self) -> None:
        self._regions.clear()

    def snapshot(self) -> List[InteractiveRegion]:
        """Regions in precedence order."""
        ordered = sorted(self._regions.values(), key=lambda item: (-item[1].priority, item[0]))
        return [region for _, region in ordered]

    def ids(self) -> List[str]:
        return [r.id for r in self.snapshot()]

    def __contains__(self, region_id: str) -> bool:
        return region_id in self._regions

    def __len__(self) -> int:
        return len(self._regions)
