"""Field mapping review endpoints."""

import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from ..models import (
    BulkAcceptResponse,
    FieldMappingCreate,
    FieldMappingUpdate,
    TableSelection,
)
from ..deps import get_runner, get_tracker
from ...tracker import MigrationTracker
from ...models.mapping import FieldMapping
from ...services.runner import WorkflowRunner

router = APIRouter()


@router.get("")
async def get_mapping(tracker: MigrationTracker = Depends(get_tracker)):
    """Mapping progress, table mappings and suggestions."""
    return tracker.mapping_state.to_dict()


@router.post("/run")
async def run_mapping(background_tasks: BackgroundTasks, runner: WorkflowRunner = Depends(get_runner)):
    """Generate table mappings and suggestions."""
    if runner.tracker.mapping_state.is_processing:
        raise HTTPException(status_code=409, detail="Mapping already running")
    background_tasks.add_task(runner.run_mapping)
    return {"status": "started"}


@router.put("/selection")
async def select_tables(data: TableSelection, tracker: MigrationTracker = Depends(get_tracker)):
    """Select the table pair to review."""
    return tracker.set_selected_tables(data.source_table_id, data.target_table_id).to_dict()


@router.post("/suggestions")
async def generate_suggestions(tracker: MigrationTracker = Depends(get_tracker)):
    """Regenerate suggestions for the selected table pair."""
    suggestions = tracker.generate_ai_suggestions()
    return {"suggestions": [s.to_dict() for s in suggestions], "total": len(suggestions)}


@router.patch("/suggestions/{mapping_id}")
async def update_mapping(mapping_id: str, data: FieldMappingUpdate,
                         tracker: MigrationTracker = Depends(get_tracker)):
    """Apply a partial update to a field mapping."""
    return tracker.update_field_mapping(mapping_id, data.model_dump(exclude_unset=True)).to_dict()


@router.post("/suggestions/{mapping_id}/accept")
async def accept_mapping(mapping_id: str, tracker: MigrationTracker = Depends(get_tracker)):
    return tracker.accept_mapping(mapping_id).to_dict()


@router.post("/suggestions/{mapping_id}/reject")
async def reject_mapping(mapping_id: str, tracker: MigrationTracker = Depends(get_tracker)):
    return tracker.reject_mapping(mapping_id).to_dict()


@router.post("/suggestions/{mapping_id}/revert")
async def revert_mapping(mapping_id: str, tracker: MigrationTracker = Depends(get_tracker)):
    return tracker.revert_mapping(mapping_id).to_dict()


@router.post("/bulk-accept", response_model=BulkAcceptResponse)
async def bulk_accept(tracker: MigrationTracker = Depends(get_tracker)):
    """Approve every suggestion with confidence of at least 90."""
    approved = tracker.bulk_accept_high_confidence()
    return BulkAcceptResponse(
        approved=approved,
        suggestions=[s.to_dict() for s in tracker.mapping_state.suggestions],
    )


@router.post("/field-mappings")
async def add_field_mapping(data: FieldMappingCreate, tracker: MigrationTracker = Depends(get_tracker)):
    """Add a manual field mapping to the selected table pair."""
    values = data.model_dump()
    values["id"] = values["id"] or f"manual-{uuid.uuid4().hex[:8]}"
    mapping = FieldMapping(**values)
    tracker.add_field_mapping(mapping)
    return mapping.to_dict()


@router.delete("/field-mappings/{mapping_id}")
async def remove_field_mapping(mapping_id: str, tracker: MigrationTracker = Depends(get_tracker)):
    tracker.remove_field_mapping(mapping_id)
    return {"status": "deleted"}


@router.post("/complete")
async def complete_mapping(tracker: MigrationTracker = Depends(get_tracker)):
    """Mark the mapping phase complete."""
    tracker.complete_mapping()
    return tracker.mapping_state.to_dict()


@router.delete("")
async def reset_mapping(tracker: MigrationTracker = Depends(get_tracker)):
    tracker.reset_mapping()
    return {"status": "reset"}
