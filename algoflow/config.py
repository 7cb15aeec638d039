"""
Clinical Algorithm Engine — Configuration
=========================================
Centralised settings for logging, report output, sessions and layout spacing.
Loads overrides from the project-level .env file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PACKAGE_DIR = Path(__file__).resolve().parent                  # algoflow/
PROJECT_ROOT = PACKAGE_DIR.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime settings, read once from the environment."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    report_output_dir: str = "reports"
    max_sessions: int = 500
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 8000

    # ── Layout spacing (matches the flowchart renderer's defaults) ──────
    node_width: float = 180.0
    node_height: float = 70.0
    rank_sep: float = 60.0
    node_sep: float = 40.0
    order_iterations: int = 4
    layout_direction: str = "TB"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.getenv("ALGOFLOW_LOG_LEVEL", "INFO"),
            log_file=os.getenv("ALGOFLOW_LOG_FILE") or None,
            report_output_dir=os.getenv("ALGOFLOW_REPORT_DIR", "reports"),
            max_sessions=_env_int("ALGOFLOW_MAX_SESSIONS", 500),
            cors_origins=_env_list("ALGOFLOW_CORS_ORIGINS", ["*"]),
            host=os.getenv("ALGOFLOW_HOST", "0.0.0.0"),
            port=_env_int("ALGOFLOW_PORT", 8000),
            node_width=_env_float("ALGOFLOW_NODE_WIDTH", 180.0),
            node_height=_env_float("ALGOFLOW_NODE_HEIGHT", 70.0),
            rank_sep=_env_float("ALGOFLOW_RANK_SEP", 60.0),
            node_sep=_env_float("ALGOFLOW_NODE_SEP", 40.0),
            order_iterations=_env_int("ALGOFLOW_ORDER_ITERATIONS", 4),
            layout_direction=os.getenv("ALGOFLOW_LAYOUT_DIRECTION", "TB").upper(),
        )


settings = Settings.from_env()
