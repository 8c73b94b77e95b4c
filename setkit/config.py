"""
Runtime configuration — where the catalog lives and how the server binds.

Values come from environment variables, optionally seeded from a
``.env`` / ``.env.local`` file at the repository root.  Variables that
are already set in the environment always win over the files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"


# ── .env loader ────────────────────────────────────────────────────

def load_env(root: Path = ROOT) -> None:
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v


# ── Settings ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    data_source: str = str(DATA_DIR)    # directory or http(s):// base URL
    host: str = "127.0.0.1"
    port: int = 8000
    fetch_timeout_s: float = 10.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from the environment (after reading .env files)."""
    load_env()
    defaults = Settings()
    return Settings(
        data_source=os.environ.get("SETKIT_DATA", defaults.data_source),
        host=os.environ.get("SETKIT_HOST", defaults.host),
        port=int(os.environ.get("SETKIT_PORT", defaults.port)),
        fetch_timeout_s=float(os.environ.get("SETKIT_FETCH_TIMEOUT", defaults.fetch_timeout_s)),
        log_level=os.environ.get("SETKIT_LOG_LEVEL", defaults.log_level).upper(),
    )
