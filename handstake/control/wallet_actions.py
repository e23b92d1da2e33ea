"""
HandStake Wallet Actions.
========================

Stand-in for the wallet/staking SDK behind `IWalletActions`.
It keeps the same call surface the real connector exposes and reports
outcomes the way the web app does: a toast per call, listeners notified
when the connection flips.

- **SimulatedWallet:** Connects instantly, records every stake/exit request.
- **Notifier:** Anything with `notify(message, kind)` (the HUD implements it).
"""

import logging
import math
from typing import Callable, List, Optional

from handstake.config import CONFIG
from handstake.core.interfaces import IWalletActions

logger = logging.getLogger(__name__)

ConnectionListener = Callable[[bool], None]


class SimulatedWallet(IWalletActions):
    """
    Args:
        notifier: Receives user-facing messages ("success" / "error" / "info").
        rate: Shares per ETH, used to size the exit request.
        address: Displayed once connected.
    """
    def __init__(self, notifier=None, rate: float = 1e18, address: str = "0x6b175474e89094c44da98b954eedeac495271d0f"):
        self.notifier = notifier
        self.rate = rate
        self.address = address
        self.connected = False
        self.transactions: List[dict] = []
        self._listeners: List[ConnectionListener] = []

    def on_connection_change(self, listener: ConnectionListener) -> None:
        self._listeners.append(listener)

    # --- IWalletActions ---
    def connect_wallet(self) -> None:
        if self.connected:
            return
        self.connected = True
        logger.info("🔗 Wallet connected: %s", self.short_address)
        self._notify("Wallet Connected", "success")
        self._emit(True)

    def disconnect(self) -> None:
        if not self.connected:
            return
        self.connected = False
        logger.info("🔌 Wallet disconnected")
        self._notify("Wallet Disconnected", "error")
        self._emit(False)

    def stake(self, amount: float) -> None:
        if not self.connected:
            self._notify("Connect a wallet first", "error")
            return
        logger.info("💸 Sending stake transaction with %s ETH", amount)
        self.transactions.append({"function": "stake", "value": amount})
        self._notify(f"Staking {amount} ETH...", "info")

    def request_exit(self) -> None:
        if not self.connected:
            self._notify("Connect a wallet first", "error")
            return
        shares = self.exit_shares()
        logger.info("🚪 Requesting exit for %d shares", shares)
        self.transactions.append({"function": "requestExit", "args": (shares,)})
        self._notify("Exit request submitted. Processing takes ~4 days on average.", "info")
        self._notify("You will receive an exit ticket (soulbound NFT) for your pending exit position.", "info")

    # --- HELPERS ---
    def exit_shares(self) -> int:
        return int(math.floor(CONFIG["EXIT_AMOUNT"] * self.rate))

    @property
    def short_address(self) -> Optional[str]:
        if not self.connected or not self.address:
            return None
        return f"{self.address[:6]}...{self.address[-6:-1]}"

    def _notify(self, message: str, kind: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(message, kind)

    def _emit(self, connected: bool) -> None:
        for listener in list(self._listeners):
            listener(connected)
