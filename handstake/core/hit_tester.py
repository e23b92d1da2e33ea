"""
HandStake Hit Tester.
Maps a cursor position to the first region (in precedence order) under it.
"""
from typing import Iterable, Optional

from handstake.core.types import InteractiveRegion, ScreenPoint


class HitTester:
    def hit_test(self, point: ScreenPoint, regions: Iterable[InteractiveRegion]) -> Optional[str]:
        """
        Args:
            point: Cursor position in viewport pixels.
            regions: Registry snapshot, already in precedence order.

        Returns:
            Id of the first region whose live bounds contain the point, else None.
        """
        for region in regions:
            # Queried live: layout can move between frames
            bounds = region.bounds_provider()
            if bounds is None:
                continue
            if bounds.contains(point):
                return region.id
        return None
