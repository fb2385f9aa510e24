"""FastAPI routes for the strict-migrate report API."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from strict_migrate.analysis.candidates import rank_candidates
from strict_migrate.analysis.cycles import CycleStructureError
from strict_migrate.analysis.eligibility import eligible_files
from strict_migrate.exporter import build_report
from strict_migrate.models import Language, MigrationConfig
from strict_migrate.pipeline import run_scan
from strict_migrate.web.state import ScanSession, state

router = APIRouter(prefix="/api")


# --- Request / Response models ---

class ScanRequest(BaseModel):
    path: str
    allowlist: str | None = None
    languages: list[str] = ["python"]


class ComponentOut(BaseModel):
    id: int
    files: list[str]
    checked: bool
    eligible: bool
    dependencies: list[int]
    dependents: list[int]
    dependency_depth: int
    dependent_depth: int


class CandidateOut(BaseModel):
    file: str
    direct_importers: int
    importers: int


# --- Helpers ---

def _validate_path(p: str) -> Path:
    resolved = Path(p).expanduser().resolve()
    if not resolved.exists():
        raise HTTPException(404, f"Path not found: {resolved}")
    if not resolved.is_dir():
        raise HTTPException(400, f"Not a directory: {resolved}")
    return resolved


def _get_session(scan_id: str) -> ScanSession:
    session = state.get_scan(scan_id)
    if not session or session.result is None:
        raise HTTPException(404, "Scan not found")
    return session


def _relative(file: str, root: str) -> str:
    try:
        return Path(file).relative_to(root).as_posix()
    except ValueError:
        return file


# --- Endpoints ---

@router.post("/scan")
async def scan(req: ScanRequest):
    source_dir = _validate_path(req.path)
    try:
        languages = [Language(lang) for lang in req.languages]
    except ValueError:
        raise HTTPException(400, f"Unsupported language in {req.languages}")

    config = MigrationConfig(
        source_dir=source_dir,
        allowlist_path=Path(req.allowlist).expanduser() if req.allowlist else None,
        languages=languages,
    )
    try:
        result = await asyncio.to_thread(run_scan, config)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except CycleStructureError as e:
        raise HTTPException(500, str(e))

    session = ScanSession(
        source_dir=str(source_dir),
        allowlist=str(config.resolved_allowlist),
        result=result,
    )
    state.add_scan(session)
    return {"scan_id": session.id, **build_report(result, source_dir)["summary"]}


@router.get("/scan/{scan_id}")
async def get_scan(scan_id: str):
    session = _get_session(scan_id)
    report = build_report(session.result, Path(session.source_dir))
    return {
        "scan_id": session.id,
        "source_dir": session.source_dir,
        "allowlist": session.allowlist,
        "timestamp": session.timestamp,
        "summary": report["summary"],
    }


@router.get("/scan/{scan_id}/components", response_model=list[ComponentOut])
async def get_components(scan_id: str, eligible_only: bool = Query(False)):
    session = _get_session(scan_id)
    nodes = build_report(session.result, Path(session.source_dir))["nodes"]
    if eligible_only:
        nodes = [n for n in nodes if n["eligible"]]
    return nodes


@router.get("/scan/{scan_id}/candidates", response_model=list[CandidateOut])
async def get_candidates(scan_id: str, limit: int = Query(50, ge=1, le=1000)):
    session = _get_session(scan_id)
    result = session.result
    files = eligible_files(result.condensed, result.checked)
    ranked = rank_candidates(result.graph, files)[:limit]
    return [
        CandidateOut(
            file=_relative(c.file, session.source_dir),
            direct_importers=c.direct_importers,
            importers=c.importers,
        )
        for c in ranked
    ]


@router.delete("/scan/{scan_id}")
async def delete_scan(scan_id: str):
    if not state.delete_scan(scan_id):
        raise HTTPException(404, "Scan not found")
    return {"deleted": scan_id}
