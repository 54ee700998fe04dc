"""Wizard state, phase navigation and notifications."""

from fastapi import APIRouter, Depends

from ..models import NotificationListResponse, PhaseResponse, PhaseUpdate
from ..deps import get_runner, get_tracker
from ...tracker import MigrationTracker
from ...services.runner import WorkflowRunner

router = APIRouter()


def _phase_response(tracker: MigrationTracker) -> PhaseResponse:
    project = tracker.current_project
    return PhaseResponse(
        current_phase=tracker.current_phase,
        can_proceed=tracker.can_proceed_to_next_phase(),
        completed_phases=project.progress.completed_phases if project else [],
    )


@router.get("/state")
async def get_state(tracker: MigrationTracker = Depends(get_tracker)):
    """Full wizard state."""
    return tracker.to_dict()


@router.get("/phase", response_model=PhaseResponse)
async def get_phase(tracker: MigrationTracker = Depends(get_tracker)):
    """Current phase and whether its gate is open."""
    return _phase_response(tracker)


@router.put("/phase", response_model=PhaseResponse)
async def set_phase(data: PhaseUpdate, tracker: MigrationTracker = Depends(get_tracker)):
    """Move to a phase; refused moves return 409."""
    tracker.set_current_phase(data.phase, force=data.force)
    return _phase_response(tracker)


@router.get("/notifications", response_model=NotificationListResponse)
async def list_notifications(limit: int = 10, runner: WorkflowRunner = Depends(get_runner)):
    """Most recent notifications, newest first."""
    notifications = runner.notifications.recent(limit)
    return NotificationListResponse(
        notifications=[n.to_dict() for n in notifications],
        total=len(notifications),
    )
