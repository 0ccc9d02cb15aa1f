"""Run identity and the output layout it writes into."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from swing_backtester.config.loader import compute_config_hash


RUN_CONTEXT_FILE = "run_context.json"


@dataclass(frozen=True)
class RunContext:
    run_id: str
    config_path: Path
    config_hash: str
    started_at: datetime
    data_dir: Optional[Path] = None
    output_dir: Optional[Path] = None

    @property
    def audit_path(self) -> Optional[Path]:
        return None if self.output_dir is None else self.output_dir / "audit.log"

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "config_path": str(self.config_path),
            "config_hash": self.config_hash,
            "started_at": self.started_at.isoformat(),
            "data_dir": None if self.data_dir is None else str(self.data_dir),
            "output_dir": None if self.output_dir is None else str(self.output_dir),
        }

    def write(self) -> Path:
        if self.output_dir is None:
            raise ValueError("RunContext has no output_dir to write into")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / RUN_CONTEXT_FILE
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        return path


def create_run_context(
    config_path: str | Path,
    run_id_prefix: str,
    data_dir: Optional[str | Path] = None,
    output_dir: Optional[str | Path] = None,
    run_id: Optional[str] = None,
) -> RunContext:
    """Run ids look like ``<prefix>-<UTC stamp>-<first 8 hex of the config hash>``."""
    path = Path(config_path)
    config_hash = compute_config_hash(path)
    started_at = datetime.now(timezone.utc)
    if run_id is None:
        run_id = f"{run_id_prefix}-{started_at:%Y%m%dT%H%M%SZ}-{config_hash[:8]}"
    return RunContext(
        run_id=run_id,
        config_path=path,
        config_hash=config_hash,
        started_at=started_at,
        data_dir=None if data_dir is None else Path(data_dir),
        output_dir=None if output_dir is None else Path(output_dir),
    )
