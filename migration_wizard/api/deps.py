"""Request dependencies resolving the app's tracker and runner."""

from fastapi import Request

from ..tracker import MigrationTracker
from ..services.runner import WorkflowRunner


def get_tracker(request: Request) -> MigrationTracker:
    return request.app.state.tracker


def get_runner(request: Request) -> WorkflowRunner:
    return request.app.state.runner
