"""
HandStake Core Interfaces.
Defines the abstract contracts for the collaborators around the gesture engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from handstake.core.types import HandFrame


class IWalletActions(ABC):
    """
    Abstract Protocol for the wallet/staking layer.
    Every call is fire-and-forget from the engine's point of view.
    """

    @abstractmethod
    def connect_wallet(self) -> None: pass
    @abstractmethod
    def disconnect(self) -> None: pass
    @abstractmethod
    def stake(self, amount: float) -> None: pass
    @abstractmethod
    def request_exit(self) -> None: pass


class IHandDetector(ABC):
    """Hand-landmark model. May be slow; LandmarkSource runs it off the host loop."""

    @abstractmethod
    def detect(self, frame: Any) -> Optional[HandFrame]: pass
    @abstractmethod
    def close(self) -> None: pass


class IVideoStream(ABC):
    """Live capture stream."""

    @abstractmethod
    def read(self) -> Optional[Any]:
        """Latest frame, or None once the stream has dropped."""
    @abstractmethod
    def release(self) -> None: pass
