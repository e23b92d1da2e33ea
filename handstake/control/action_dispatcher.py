"""
HandStake Action Dispatcher (The Actuator).
==========================================

Routes a gesture-click on a region to the application action behind it,
through a single global cooldown.

Firing rule (per tick):
    pinching AND (now - last_fire) > cooldown AND region has an action
    -> invoke the action once, last_fire = now.

The rule is level-triggered: a pinch held over a button fires again every
cooldown period. Set `EDGE_TRIGGERED_CLICK` to fire once per pinch-down.

Actions are fire-and-forget. The wallet layer reports its own success or
failure; an exception escaping a handler is logged and the pipeline goes on.
"""

import logging
from typing import Callable, Optional, Tuple

from handstake.config import CONFIG
from handstake.core.interfaces import IWalletActions
from handstake.core.types import ActionId, RegionId

logger = logging.getLogger(__name__)

ActionCall = Tuple[ActionId, tuple]


def resolve_action(region_id: Optional[str], stake_expanded: bool = False) -> Optional[ActionCall]:
    """
    Maps a region id to (action, args). None when the region has no action.
    The stake area only has one while its menu is collapsed.
    """
    if region_id is None:
        return None
    if region_id == RegionId.CONNECT_WALLET:
        return ActionId.CONNECT_WALLET, ()
    if region_id == RegionId.DISCONNECT:
        return ActionId.DISCONNECT, ()
    if region_id == RegionId.UNSTAKE:
        return ActionId.REQUEST_EXIT, ()
    if region_id == RegionId.STAKE_AREA:
        return None if stake_expanded else (ActionId.EXPAND_STAKE_MENU, ())
    amount = RegionId.parse_stake_option(region_id)
    if amount is not None:
        return ActionId.STAKE, (amount,)
    return None


class ActionDispatcher:
    """
    Attributes:
        last_fire (float): Timestamp of the last fired action (single, global).
        is_currently_pinching (bool): Previous tick's pinch flag.
    """
    def __init__(self, wallet: IWalletActions, on_expand_stake: Optional[Callable[[], None]] = None,
                 cooldown: Optional[float] = None, edge_triggered: Optional[bool] = None):
        self.wallet = wallet
        self.on_expand_stake = on_expand_stake
        self.cooldown = cooldown if cooldown is not None else CONFIG["ACTION_COOLDOWN"]
        self.edge_triggered = edge_triggered if edge_triggered is not None else CONFIG["EDGE_TRIGGERED_CLICK"]

        self.last_fire = float("-inf")
        self.is_currently_pinching = False

    def tick(self, hovered_region_id: Optional[str], is_pinching: bool, now: float,
             stake_expanded: bool = False) -> Optional[ActionId]:
        """
        Args:
            stake_expanded: Menu state after this tick's UI update.

        Returns:
            The action fired on this tick, or None.
        """
        was_pinching = self.is_currently_pinching
        self.is_currently_pinching = is_pinching

        if not is_pinching:
            return None
        if self.edge_triggered and was_pinching:
            return None
        if (now - self.last_fire) <= self.cooldown:
            return None

        call = resolve_action(hovered_region_id, stake_expanded)
        if call is None:
            return None

        action, args = call
        self.last_fire = now
        logger.info("👆 %s on '%s'", action.value, hovered_region_id)
        self.invoke_action(action, *args)
        return action

    def invoke_action(self, action: ActionId, *args) -> None:
        """Fire-and-forget call into the wallet layer (or the UI for the stake menu)."""
        try:
            if action == ActionId.CONNECT_WALLET:
                self.wallet.connect_wallet()
            elif action == ActionId.DISCONNECT:
                self.wallet.disconnect()
            elif action == ActionId.STAKE:
                self.wallet.stake(*args)
            elif action == ActionId.REQUEST_EXIT:
                self.wallet.request_exit()
            elif action == ActionId.EXPAND_STAKE_MENU:
                if self.on_expand_stake: self.on_expand_stake()
        except Exception:
            logger.exception("Action handler for %s failed", action.value)

    def reset(self):
        self.last_fire = float("-inf")
        self.is_currently_pinching = False
