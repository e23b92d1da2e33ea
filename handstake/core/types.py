"""
HandStake Types.
Central definition of Data Contracts to prevent circular imports.
"""
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional, Sequence, Tuple

HAND_LANDMARK_COUNT = 21


# --- GEOMETRY TYPES ---
@dataclass(frozen=True)
class Landmark:
    """Normalized camera-space keypoint (0.0 - 1.0)."""
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, x: float, y: float, w: float, h: float) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> float: return self.right - self.left
    @property
    def height(self) -> float: return self.bottom - self.top
    @property
    def center(self) -> ScreenPoint:
        return ScreenPoint((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def contains(self, point: ScreenPoint) -> bool:
        """Edges count as inside."""
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def scaled(self, factor: float) -> "Rect":
        """Same center, sides multiplied by `factor` (hover zoom)."""
        c = self.center
        hw, hh = self.width * factor / 2, self.height * factor / 2
        return Rect(c.x - hw, c.y - hh, c.x + hw, c.y + hh)


# --- HAND TYPES ---
@dataclass(frozen=True)
class HandFrame:
    """
    The 21 landmarks of the single tracked hand in one camera frame.
    Index 4 = thumb tip, 8 = index tip, 9 = palm reference.
    """
    landmarks: Tuple[Landmark, ...]

    def __post_init__(self):
        if len(self.landmarks) != HAND_LANDMARK_COUNT:
            raise ValueError(f"HandFrame needs {HAND_LANDMARK_COUNT} landmarks, got {len(self.landmarks)}")

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]]) -> "HandFrame":
        """Builds a frame from (x, y[, z]) tuples or objects exposing .x/.y/.z."""
        lms = []
        for p in points:
            if hasattr(p, "x"):
                lms.append(Landmark(float(p.x), float(p.y), float(getattr(p, "z", 0.0))))
            else:
                lms.append(Landmark(*(float(v) for v in p)))
        return cls(tuple(lms))

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)


@dataclass(frozen=True)
class CursorState:
    position: ScreenPoint
    is_pinching: bool
    pinch_distance: float = 0.0


# --- REGION TYPES ---
BoundsProvider = Callable[[], Optional[Rect]]


@dataclass(frozen=True)
class InteractiveRegion:
    id: str
    bounds_provider: BoundsProvider
    priority: int = 0


class RegionId:
    """Ids of the regions the staking screen registers."""
    CONNECT_WALLET = "connect-wallet"
    DISCONNECT = "disconnect"
    STAKE_AREA = "stake-area"
    UNSTAKE = "unstake"

    @staticmethod
    def stake_option(amount: float) -> str:
        return f"stake-{amount:g}"

    @staticmethod
    def parse_stake_option(region_id: Optional[str]) -> Optional[float]:
        """'stake-0.05' -> 0.05. None for anything that is not a stake amount."""
        if not region_id or not region_id.startswith("stake-"):
            return None
        try:
            amount = float(region_id[len("stake-"):])
        except ValueError:
            return None
        return amount if math.isfinite(amount) else None


# --- UI MODE ---
class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTED = auto()


class StakeMenu(Enum):
    COLLAPSED = auto()
    EXPANDED = auto()


class ActionId(Enum):
    CONNECT_WALLET = "connectWallet"
    DISCONNECT = "disconnect"
    STAKE = "stake"
    REQUEST_EXIT = "requestExit"
    EXPAND_STAKE_MENU = "expandStakeMenu"


# --- RENDER PROJECTION ---
@dataclass(frozen=True)
class RenderState:
    """Read-only snapshot handed to the presentation layer every tick."""
    cursor_position: ScreenPoint
    is_pinching: bool
    hovered_region_id: Optional[str]
    stake_expanded: bool = False
    pressed_region_id: Optional[str] = None
    fired_action: Optional[ActionId] = None
    hand_frame: Optional[HandFrame] = field(default=None, compare=False)
