"""In-memory state for the report API."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from strict_migrate.pipeline import ScanResult


@dataclass
class ScanSession:
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    source_dir: str = ""
    allowlist: str = ""
    result: ScanResult | None = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class AppState:
    """Singleton in-memory state shared by all API routes."""

    def __init__(self):
        self.scans: dict[str, ScanSession] = {}

    def add_scan(self, session: ScanSession) -> None:
        self.scans[session.id] = session

    def get_scan(self, scan_id: str) -> ScanSession | None:
        return self.scans.get(scan_id)

    def delete_scan(self, scan_id: str) -> bool:
        return self.scans.pop(scan_id, None) is not None


state = AppState()
