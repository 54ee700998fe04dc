"""Code generation endpoints."""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from ..models import CodeGenerationRequest
from ..deps import get_runner, get_tracker
from ...tracker import MigrationTracker
from ...models.codegen import CodePlatform, PLATFORM_INFO
from ...services.runner import WorkflowRunner

router = APIRouter()


@router.get("")
async def get_code_generation(tracker: MigrationTracker = Depends(get_tracker)):
    """Code generation progress and artifacts."""
    return tracker.code_generation_state.to_dict()


@router.get("/platforms")
async def list_platforms():
    """Supported platforms and their descriptions."""
    return {"platforms": [{"id": p.value, **info} for p, info in PLATFORM_INFO.items()]}


@router.post("/run")
async def run_code_generation(data: CodeGenerationRequest, background_tasks: BackgroundTasks,
                              runner: WorkflowRunner = Depends(get_runner)):
    """Generate code for a platform (default: the selected one)."""
    if runner.tracker.code_generation_state.is_processing:
        raise HTTPException(status_code=409, detail="Code generation already running")
    background_tasks.add_task(runner.run_code_generation, data.platform)
    return {"status": "started"}


@router.get("/{platform}")
async def get_generated_code(platform: CodePlatform, tracker: MigrationTracker = Depends(get_tracker)):
    """Get the artifact generated for one platform."""
    code = tracker.code_generation_state.generated_codes.get(platform)
    if code is None:
        raise HTTPException(status_code=404, detail=f"No code generated for {platform.value}")
    return code.to_dict()


@router.post("/complete")
async def complete_code_generation(tracker: MigrationTracker = Depends(get_tracker)):
    """Mark the code generation phase complete."""
    tracker.complete_code_generation()
    return tracker.code_generation_state.to_dict()
