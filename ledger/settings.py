"""Runtime configuration read from ``LEDGER_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from .storage import STORAGE_KEY


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    storage_key: str = STORAGE_KEY
    locale: str = "en"
    env: str = "prod"
    allowed_origins: List[str] = field(default_factory=list)
    secret_key: str = "dev-secret"
    log_level: str = "INFO"

    @property
    def is_dev(self) -> bool:
        return self.env in {"dev", "development"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_origins = env.get("LEDGER_ALLOWED_ORIGINS", "")
        return cls(
            data_dir=Path(env.get("LEDGER_DATA_DIR") or "data"),
            storage_key=env.get("LEDGER_STORAGE_KEY") or STORAGE_KEY,
            locale=(env.get("LEDGER_LOCALE") or "en").strip().lower(),
            env=(env.get("LEDGER_ENV") or "prod").strip().lower(),
            allowed_origins=[origin.strip() for origin in raw_origins.split(",") if origin.strip()],
            secret_key=env.get("LEDGER_SECRET_KEY") or "dev-secret",
            log_level=(env.get("LEDGER_LOG_LEVEL") or "INFO").strip().upper(),
        )
