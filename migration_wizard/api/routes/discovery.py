"""Lineage discovery endpoints."""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from ..deps import get_runner, get_tracker
from ...tracker import MigrationTracker
from ...services.runner import WorkflowRunner

router = APIRouter()


@router.get("")
async def get_discovery(tracker: MigrationTracker = Depends(get_tracker)):
    """Discovery progress and lineage graph."""
    return tracker.discovery_state.to_dict()


@router.post("/run")
async def run_discovery(background_tasks: BackgroundTasks, runner: WorkflowRunner = Depends(get_runner)):
    """Start lineage discovery."""
    if runner.tracker.discovery_state.is_processing:
        raise HTTPException(status_code=409, detail="Discovery already running")
    background_tasks.add_task(runner.run_discovery)
    return {"status": "started"}


@router.delete("")
async def reset_discovery(tracker: MigrationTracker = Depends(get_tracker)):
    tracker.reset_discovery()
    return {"status": "reset"}


@router.get("/tables/{table_id}")
async def get_table(table_id: str, tracker: MigrationTracker = Depends(get_tracker)):
    """Get a table of the lineage graph by ID or name."""
    graph = tracker.discovery_state.lineage_graph
    table = graph.get_table(table_id) if graph else None
    if table is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return table.to_dict()


@router.get("/columns")
async def search_columns(q: str, tracker: MigrationTracker = Depends(get_tracker)):
    """Search lineage columns by name or description."""
    graph = tracker.discovery_state.lineage_graph
    columns = graph.search_columns(q) if graph else []
    return {"columns": [c.to_dict() for c in columns], "total": len(columns)}
