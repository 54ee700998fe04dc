"""Schema file upload endpoints."""

from fastapi import APIRouter, BackgroundTasks, Depends

from ..models import FileStatusUpdate, FileUpload
from ..deps import get_runner, get_tracker
from ...tracker import MigrationTracker
from ...models.schema_file import FileSide, SchemaFile
from ...services.runner import WorkflowRunner

router = APIRouter()


@router.get("/files")
async def list_files(tracker: MigrationTracker = Depends(get_tracker)):
    """List uploaded source and target files."""
    return {
        "source_files": [f.to_dict() for f in tracker.source_files],
        "target_files": [f.to_dict() for f in tracker.target_files],
        "upload_progress": tracker.upload_progress,
        "can_proceed": tracker.can_proceed_to_next_phase(),
    }


@router.post("/files")
async def upload_file(
    data: FileUpload,
    background_tasks: BackgroundTasks,
    tracker: MigrationTracker = Depends(get_tracker),
    runner: WorkflowRunner = Depends(get_runner),
):
    """Add a schema file and process it in the background."""
    file = SchemaFile(
        name=data.name,
        dialect=data.dialect,
        size=len(data.content.encode("utf-8")),
        type=data.type,
    )
    tracker.add_file(file, data.side)
    background_tasks.add_task(runner.process_file, file, data.content)
    return file.to_dict()


@router.patch("/files/{file_id}")
async def update_file(file_id: str, data: FileStatusUpdate, tracker: MigrationTracker = Depends(get_tracker)):
    """Set a file's status."""
    return tracker.update_file_status(file_id, data.status, error=data.error).to_dict()


@router.delete("/files/{file_id}")
async def remove_file(file_id: str, side: FileSide, tracker: MigrationTracker = Depends(get_tracker)):
    """Remove a file from one side."""
    tracker.get_file(file_id)
    tracker.remove_file(file_id, side)
    return {"status": "deleted"}


@router.delete("/files")
async def clear_files(tracker: MigrationTracker = Depends(get_tracker)):
    """Remove every uploaded file."""
    tracker.clear_files()
    return {"status": "cleared"}
