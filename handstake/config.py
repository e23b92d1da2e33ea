"""
HandStake Configuration Management.
===================================

This module defines the tunable parameters of the gesture engine.
The parameters follow the same "Layer Cake" as the runtime:
camera -> landmarks -> cursor/pinch -> dispatch -> presentation.

! WARNING !
`PINCH_THRESHOLD` and `ACTION_COOLDOWN` change the "feel" of clicking
immediately. The landmark indices must match the MediaPipe hand topology.
"""

import logging
import logging.handlers
import os
from pathlib import Path

# --- SYSTEM PATHS ---
FILE_PATH = Path(__file__).resolve()
PROJECT_ROOT = FILE_PATH.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

PATHS = {
    "LOG_DIR": LOG_DIR,
    "LOG_FILE": LOG_DIR / "handstake.log",
}

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: INPUT SIGNAL (Camera + Detector)
    # =========================================================
    "CAMERA_INDEX": 0,              # OpenCV device ID
    "TARGET_FPS": 30,               # Hardware limit for Camera
    "MAX_NUM_HANDS": 1,             # Single-hand tracking
    "MODEL_COMPLEXITY": 1,          # 0=Fast, 1=Balanced
    "MIN_DETECTION_CONFIDENCE": 0.5,
    "MIN_TRACKING_CONFIDENCE": 0.5,

    # =========================================================
    # LAYER 2: CURSOR MAPPING
    # =========================================================
    "VIEWPORT_WIDTH": 1280,         # Pixels of the interactive surface
    "VIEWPORT_HEIGHT": 720,
    "PALM_LANDMARK": 9,             # Middle finger MCP, drives the cursor
    "THUMB_TIP": 4,
    "INDEX_TIP": 8,

    # =========================================================
    # LAYER 3: CLICK (Pinch)
    # =========================================================
    "PINCH_THRESHOLD": 0.05,        # Strict: distance must be below this

    # =========================================================
    # LAYER 4: DISPATCH
    # =========================================================
    "ACTION_COOLDOWN": 1.0,         # Seconds between two actions, any region
    "EDGE_TRIGGERED_CLICK": False,  # True = fire once per pinch-down
    "PRESS_FLASH_SECONDS": 0.5,     # How long a fired button stays "pressed"

    # =========================================================
    # LAYER 5: STAKING
    # =========================================================
    "STAKE_OPTIONS": (0.01, 0.05, 0.1),
    "EXIT_AMOUNT": 0.009,           # ETH worth of shares requested on exit

    # =========================================================
    # PRESENTATION & LOGGING
    # =========================================================
    "TOAST_SECONDS": 3.0,
    "LOG_LEVEL": "INFO",
    "LOG_TO_FILE": False,
}


def init_environment():
    """
    Configures logging (console + optional rotating file) at boot.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(CONFIG["LOG_LEVEL"]).upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(asctime)s  %(levelname)-5s  %(message)s", datefmt="%H:%M:%S"))
    root_logger.addHandler(console)

    if CONFIG["LOG_TO_FILE"]:
        os.makedirs(PATHS["LOG_DIR"], exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            PATHS["LOG_FILE"], maxBytes=5 * 1024 * 1024, backupCount=3
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)-7s] %(name)-30s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    return root_logger
