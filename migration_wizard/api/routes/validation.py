"""Validation sign-off, project completion and export endpoints."""

from fastapi import APIRouter, Depends

from ..models import ChecklistUpdate, ExportRequest, ExportResponse
from ..deps import get_tracker
from ...tracker import MigrationTracker
from ...services.export import export_project

router = APIRouter()


@router.get("/checklist")
async def get_checklist(tracker: MigrationTracker = Depends(get_tracker)):
    return tracker.validation_checklist.to_dict()


@router.patch("/checklist/{item_id}")
async def update_checklist_item(item_id: str, data: ChecklistUpdate,
                                tracker: MigrationTracker = Depends(get_tracker)):
    """Check or uncheck a checklist item."""
    tracker.set_checklist_item(item_id, data.completed)
    return tracker.validation_checklist.to_dict()


@router.post("/complete")
async def complete_project(tracker: MigrationTracker = Depends(get_tracker)):
    """Complete the current project; refused while required items are unchecked."""
    project = tracker.complete_project()
    return {"current_project": project.to_dict() if project else None}


@router.post("/export", response_model=ExportResponse)
async def export(data: ExportRequest, tracker: MigrationTracker = Depends(get_tracker)):
    """Write generated code, README and mapping report to a directory."""
    result = export_project(
        tracker,
        data.output_dir or tracker.config.export_dir,
        organize_by_platform=data.organize_by_platform,
    )
    return ExportResponse(
        code_files=[str(p) for p in result["code_files"]],
        readme=str(result["readme"]),
        mapping_report=str(result["mapping_report"]) if result["mapping_report"] else None,
    )
