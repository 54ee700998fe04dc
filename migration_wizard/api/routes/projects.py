"""Project catalog and current-project endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ..models import ProjectCreate, ProjectSelect
from ..deps import get_tracker
from ...tracker import MigrationTracker

router = APIRouter()


@router.get("")
async def list_projects(tracker: MigrationTracker = Depends(get_tracker)):
    """List catalog projects."""
    projects = tracker.catalog.list_projects()
    return {"projects": [p.to_dict() for p in projects], "total": len(projects)}


@router.post("")
async def create_project(data: ProjectCreate, tracker: MigrationTracker = Depends(get_tracker)):
    """Create a draft project and make it current."""
    try:
        project = tracker.catalog.create_project(
            data.name,
            template=data.template,
            source_dialect=data.source_dialect,
            target_dialect=data.target_dialect,
            description=data.description,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    tracker.set_current_project(project)
    return project.to_dict()


@router.get("/templates")
async def list_templates(tracker: MigrationTracker = Depends(get_tracker)):
    """List project templates."""
    return {"templates": [t.to_dict() for t in tracker.catalog.list_templates()]}


@router.get("/current")
async def get_current_project(tracker: MigrationTracker = Depends(get_tracker)):
    """Get the current project."""
    if tracker.current_project is None:
        raise HTTPException(status_code=404, detail="No current project")
    return tracker.current_project.to_dict()


@router.put("/current")
async def select_project(data: ProjectSelect, tracker: MigrationTracker = Depends(get_tracker)):
    """Switch to a catalog project, or clear the selection."""
    project = tracker.catalog.get_project(data.project_id) if data.project_id else None
    tracker.set_current_project(project)
    return {
        "current_project": project.to_dict() if project else None,
        "current_phase": tracker.current_phase.value,
    }
