"""Completion checklist for the validation phase."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime

from .timestamps import to_iso


@dataclass
class ChecklistItem:
    """One sign-off item required before a project can be completed."""
    id: str
    label: str
    description: str = ""
    required: bool = True
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "required": self.required,
            "completed": self.completed,
        }


def default_checklist_items() -> List[ChecklistItem]:
    return [
        ChecklistItem("data_validated", "Data Validation Complete",
                      "All data files have been validated with acceptable accuracy", completed=True),
        ChecklistItem("code_reviewed", "Generated Code Reviewed",
                      "ETL code has been reviewed and approved by technical team"),
        ChecklistItem("stakeholder_approval", "Stakeholder Sign-off",
                      "Business stakeholders have approved mapping results"),
        ChecklistItem("documentation_complete", "Documentation Updated",
                      "System documentation reflects new architecture", required=False),
        ChecklistItem("backup_strategy", "Backup Strategy Confirmed",
                      "Data backup and recovery procedures are in place"),
        ChecklistItem("rollback_plan", "Rollback Plan Ready",
                      "Emergency rollback procedures documented and tested"),
    ]


@dataclass
class ValidationChecklist:
    """Sign-off state of the validation phase."""
    items: List[ChecklistItem] = field(default_factory=default_checklist_items)
    notes: str = ""
    completed_at: Optional[datetime] = None

    def get_item(self, item_id: str) -> Optional[ChecklistItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    @property
    def missing_required(self) -> List[str]:
        """IDs of required items not yet checked."""
        return [item.id for item in self.items if item.required and not item.completed]

    @property
    def is_satisfied(self) -> bool:
        return not self.missing_required

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "items": [item.to_dict() for item in self.items],
            "notes": self.notes,
            "is_satisfied": self.is_satisfied,
            "completed_at": to_iso(self.completed_at),
        }
