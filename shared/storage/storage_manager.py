"""
Storage Manager for the upload pipeline
Local working directories and the CSV upload ledger.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

logger = logging.getLogger(__name__)

LEDGER_COLUMNS = [
    "timestamp",
    "action",
    "channel",
    "video_id",
    "title",
    "privacy",
    "reconciled",
    "url",
    "status",
]


class StorageManager:
    """
    Service responsible for the pipeline's local storage.

    Responsibilities:
    - Create and validate storage directory structure.
    - Provide the cache directory used for temporary upload metadata.
    - Record uploads, updates and deletions in a CSV ledger.
    """

    def __init__(self, storage_root: str = "./storage"):
        """
        Initialize the StorageManager.

        Args:
            storage_root (str): The base directory for all storage.
        """
        self._root = Path(storage_root).resolve()

        # Define subdirectories
        self._cache_dir = self._root / "cache"
        self._logs_dir = self._root / "logs"
        self._performance_dir = self._root / "performance"
        self._ledger_file = self._performance_dir / "uploads_log.csv"

        self._ensure_directories()

    def _ensure_directories(self):
        """Ensures that all required storage directories exist."""
        dirs = [
            self._cache_dir,
            self._logs_dir,
            self._performance_dir
        ]
        for d in dirs:
            d.mkdir(parents=True, exist_ok=True)
            logger.debug(f"✓ Storage directory verified: {d}")

    @property
    def root(self) -> Path:
        return self._root

    @property
    def cache_path(self) -> Path:
        return self._cache_dir

    @property
    def logs_path(self) -> Path:
        return self._logs_dir

    @property
    def ledger_path(self) -> Path:
        return self._ledger_file

    def record_event(
        self,
        action: str,
        channel: str,
        video_id: str,
        title: str = "",
        privacy: Optional[str] = None,
        reconciled: Optional[bool] = None,
        url: str = "",
        status: str = "ok"
    ):
        """Appends one row to the upload ledger."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            "action": action,
            "channel": channel,
            "video_id": video_id,
            "title": title,
            "privacy": privacy or "",
            "reconciled": "" if reconciled is None else reconciled,
            "url": url,
            "status": status
        }

        df = pd.DataFrame([log_entry], columns=LEDGER_COLUMNS)
        if self._ledger_file.exists():
            df.to_csv(self._ledger_file, mode='a', header=False, index=False)
        else:
            df.to_csv(self._ledger_file, index=False)
        logger.debug(f"Ledger entry recorded: {action} {video_id}")

    def load_ledger(self) -> pd.DataFrame:
        """Reads the ledger back; empty frame when nothing was recorded yet."""
        if not self._ledger_file.exists():
            return pd.DataFrame(columns=LEDGER_COLUMNS)
        return pd.read_csv(self._ledger_file, dtype={"video_id": str, "channel": str})

    def summarize_ledger(self) -> Dict[str, Any]:
        """Counts per action, and how many uploads needed a privacy correction that failed."""
        df = self.load_ledger()
        if df.empty:
            return {"total": 0, "by_action": {}, "unreconciled_uploads": 0}

        uploads = df[df["action"] == "upload"]
        unreconciled = uploads[uploads["reconciled"].astype(str).str.lower() == "false"]
        return {
            "total": int(len(df)),
            "by_action": {k: int(v) for k, v in df["action"].value_counts().items()},
            "unreconciled_uploads": int(len(unreconciled))
        }

    def __repr__(self):
        return f"StorageManager(root={self._root})"
