"""
HandStake Screen Layout.
Viewport-relative geometry of every interactive region of the staking screen.
Rectangles are computed on demand so a resize is picked up on the next tick.
"""
from typing import Dict, Optional, Sequence

from handstake.config import CONFIG
from handstake.core.types import BoundsProvider, Rect, RegionId


class StakeScreenLayout:
    def __init__(self, width: Optional[int] = None, height: Optional[int] = None,
                 stake_options: Optional[Sequence[float]] = None):
        self.width = width or CONFIG["VIEWPORT_WIDTH"]
        self.height = height or CONFIG["VIEWPORT_HEIGHT"]
        self.stake_options = tuple(stake_options or CONFIG["STAKE_OPTIONS"])

    def resize(self, width: int, height: int):
        self.width, self.height = width, height

    # --- GEOMETRY ---
    def _centered(self, cx: float, cy: float, w: float, h: float) -> Rect:
        return Rect(cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2)

    def stake_area(self) -> Rect:
        side = 0.36 * self.height
        return self._centered(0.40 * self.width, 0.65 * self.height, side, side)

    def _stake_option_rect(self, slot: int) -> Rect:
        area = self.stake_area()
        side = area.width
        w, h = 0.46 * side, 0.16 * side
        if slot == 0:   # left, 30% down
            return Rect.from_size(area.left, area.top + 0.30 * side, w, h)
        if slot == 1:   # right, 30% down
            return Rect.from_size(area.right - w, area.top + 0.30 * side, w, h)
        # top, centered
        return Rect.from_size(area.center.x - w / 2, area.top + 0.13 * side, w, h)

    def rect(self, region_id: str) -> Optional[Rect]:
        W, H = self.width, self.height
        if region_id == RegionId.CONNECT_WALLET:
            return self._centered(0.50 * W, 0.36 * H, 0.14 * W, 0.07 * H)
        if region_id == RegionId.DISCONNECT:
            w = 0.11 * W
            return Rect.from_size(W - 0.03 * W - w, 0.025 * H, w, 0.05 * H)
        if region_id == RegionId.STAKE_AREA:
            return self.stake_area()
        if region_id == RegionId.UNSTAKE:
            return self._centered(0.68 * W, 0.65 * H, 0.16 * W, 0.07 * H)

        amount = RegionId.parse_stake_option(region_id)
        if amount is not None and amount in self.stake_options:
            return self._stake_option_rect(self.stake_options.index(amount))
        return None

    def bounds_for(self, region_id: str) -> BoundsProvider:
        """Live provider: re-evaluated on every hit-test."""
        return lambda: self.rect(region_id)

    def labels(self) -> Dict[str, str]:
        labels = {
            RegionId.CONNECT_WALLET: "Connect",
            RegionId.DISCONNECT: "Disconnect",
            RegionId.STAKE_AREA: "Stake",
            RegionId.UNSTAKE: "Unstake",
        }
        for amount in self.stake_options:
            labels[RegionId.stake_option(amount)] = f"{amount:g}"
        return labels
