"""
HandStake UI State Management.
==============================

Owns the visual state the gestures drive:
- which region is hovered,
- whether the stake sub-menu is expanded,
- whether the wallet is connected (set from wallet events),
- which button was just fired (short "pressed" flash).

It also decides which regions are registered for hit-testing. The region
set only changes inside this class, and always synchronously, so the next
hit-test already sees a freshly expanded sub-menu.
"""
import logging
from typing import Callable, Optional, Sequence

from handstake.config import CONFIG
from handstake.core.region_registry import RegionRegistry
from handstake.core.types import BoundsProvider, ConnectionState, RegionId, StakeMenu

logger = logging.getLogger(__name__)

# Sub-buttons sit inside the stake area and must win the overlap
SUB_MENU_PRIORITY = 10
BUTTON_PRIORITY = 5
AREA_PRIORITY = 0

LayoutLookup = Callable[[str], BoundsProvider]


class UIStateController:
    """
    Args:
        bounds_for: Returns the live bounds provider of a region id (the UI layout).
        registry: Shared region registry the HitTester reads.
        stake_options: Amounts offered by the stake sub-menu.
    """
    def __init__(self, bounds_for: LayoutLookup, registry: RegionRegistry,
                 stake_options: Optional[Sequence[float]] = None):
        self._bounds_for = bounds_for
        self.registry = registry
        self.stake_options = tuple(stake_options or CONFIG["STAKE_OPTIONS"])
        self.stake_region_ids = tuple(RegionId.stake_option(a) for a in self.stake_options)

        # --- DERIVED STATE ---
        self.hovered_region_id: Optional[str] = None
        self.stake_expanded = False
        self.connection = ConnectionState.DISCONNECTED

        # --- PRESS FEEDBACK ---
        self._pressed_region_id: Optional[str] = None
        self._pressed_at = 0.0

        self.sync_regions()

    # --- MODE ---
    @property
    def stake_menu(self) -> StakeMenu:
        return StakeMenu.EXPANDED if self.stake_expanded else StakeMenu.COLLAPSED

    @property
    def is_connected(self) -> bool:
        return self.connection == ConnectionState.CONNECTED

    def on_wallet_connected(self):
        if self.is_connected: return
        self.connection = ConnectionState.CONNECTED
        logger.info("UI mode -> CONNECTED")
        self.sync_regions()

    def on_wallet_disconnected(self):
        if not self.is_connected: return
        self.connection = ConnectionState.DISCONNECTED
        self.stake_expanded = False
        logger.info("UI mode -> DISCONNECTED")
        self.sync_regions()

    def on_connection_change(self, connected: bool):
        """Adapter for wallet listeners that report a single boolean."""
        if connected:
            self.on_wallet_connected()
        else:
            self.on_wallet_disconnected()

    # --- PER-TICK UPDATE ---
    def update(self, hovered_region_id: Optional[str]) -> None:
        """
        Applies this tick's hit-test result. Only called when a hand is
        present, so a missing hand leaves hover and expansion untouched.
        """
        self.hovered_region_id = hovered_region_id

        pinned_in_menu = self.stake_expanded and hovered_region_id in self.stake_region_ids
        expanded = hovered_region_id == RegionId.STAKE_AREA or pinned_in_menu

        if expanded != self.stake_expanded:
            self._set_expanded(expanded)

    def expand_stake_menu(self) -> None:
        """Gesture-click on the stake area."""
        if not self.stake_expanded:
            self._set_expanded(True)

    def _set_expanded(self, expanded: bool) -> None:
        self.stake_expanded = expanded and self.is_connected
        logger.debug("Stake menu -> %s", self.stake_menu.name)
        self.sync_regions()

    # --- REGION SET ---
    def active_region_ids(self):
        if not self.is_connected:
            return [RegionId.CONNECT_WALLET]
        ids = [RegionId.DISCONNECT, RegionId.UNSTAKE, RegionId.STAKE_AREA]
        if self.stake_expanded:
            ids.extend(self.stake_region_ids)
        return ids

    def sync_regions(self) -> None:
        """Makes the registry match the current mode, before the next hit-test."""
        wanted = self.active_region_ids()
        for region_id in list(self.registry.ids()):
            if region_id not in wanted:
                self.registry.unregister(region_id)
        for region_id in wanted:
            if region_id not in self.registry:
                self.registry.register(region_id, self._bounds_for(region_id), self._priority(region_id))

        if self.hovered_region_id is not None and self.hovered_region_id not in self.registry:
            self.hovered_region_id = None

    def _priority(self, region_id: str) -> int:
        if region_id in self.stake_region_ids: return SUB_MENU_PRIORITY
        if region_id == RegionId.STAKE_AREA: return AREA_PRIORITY
        return BUTTON_PRIORITY

    # --- PRESS FEEDBACK ---
    def mark_pressed(self, region_id: str, now: float) -> None:
        self._pressed_region_id = region_id
        self._pressed_at = now

    def pressed_region(self, now: float) -> Optional[str]:
        if self._pressed_region_id is None:
            return None
        if (now - self._pressed_at) >= CONFIG["PRESS_FLASH_SECONDS"]:
            self._pressed_region_id = None
            return None
        return self._pressed_region_id
