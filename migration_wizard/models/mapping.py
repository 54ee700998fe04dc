"""Field and table mapping models for the mapping phase."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime

from ..errors import MappingTransitionError
from .timestamps import utcnow, to_iso, from_iso


class TransformationType(str, Enum):
    """How a source column becomes a target column."""
    DIRECT = "direct"
    COMPUTED = "computed"
    CONCATENATED = "concatenated"
    CAST = "cast"
    CASE_WHEN = "case_when"
    CUSTOM = "custom"


class MappingStatus(str, Enum):
    """Human adjudication status of a field mapping."""
    SUGGESTED = "suggested"
    APPROVED = "approved"
    REJECTED = "rejected"
    MANUAL = "manual"


# Status changes a reviewer may make; staying in the same status is always allowed
ALLOWED_TRANSITIONS = {
    MappingStatus.SUGGESTED: {MappingStatus.APPROVED, MappingStatus.REJECTED},
    MappingStatus.REJECTED: {MappingStatus.SUGGESTED},
    MappingStatus.APPROVED: set(),
    MappingStatus.MANUAL: set(),
}

HIGH_CONFIDENCE_THRESHOLD = 90


@dataclass
class FieldMapping:
    """A proposed correspondence between one source column and one target column."""
    id: str
    source_table_id: str
    source_column_id: str
    target_table_id: str
    target_column_id: str
    transformation_type: TransformationType = TransformationType.DIRECT
    confidence: int = 0  # 0-100
    status: MappingStatus = MappingStatus.SUGGESTED
    formula: Optional[str] = None
    description: str = ""
    created_at: datetime = field(default_factory=utcnow)
    approved_at: Optional[datetime] = None

    def __post_init__(self):
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"Confidence must be between 0 and 100, got {self.confidence}")

    @property
    def is_processed(self) -> bool:
        """Whether a reviewer has approved or rejected this mapping."""
        return self.status in (MappingStatus.APPROVED, MappingStatus.REJECTED)

    def can_transition(self, status: MappingStatus) -> bool:
        return status == self.status or status in ALLOWED_TRANSITIONS[self.status]

    def apply(self, updates: Dict[str, Any]) -> None:
        """
        Merge a partial update into this mapping.

        Args:
            updates: Field name to new value; ``status`` changes are checked
                against the allowed transitions.

        Raises:
            MappingTransitionError: If the status change is not allowed
        """
        status = updates.get("status")
        if status is not None:
            status = MappingStatus(status)
            if not self.can_transition(status):
                raise MappingTransitionError(
                    f"Cannot move mapping {self.id} from {self.status.value} to {status.value}"
                )
        for key, value in updates.items():
            if not hasattr(self, key) or key == "id":
                raise KeyError(f"Unknown field mapping attribute: {key}")
            if key == "status":
                value = status
            elif key == "transformation_type":
                value = TransformationType(value)
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "id": self.id,
            "source_table_id": self.source_table_id,
            "source_column_id": self.source_column_id,
            "target_table_id": self.target_table_id,
            "target_column_id": self.target_column_id,
            "transformation_type": self.transformation_type.value,
            "confidence": self.confidence,
            "status": self.status.value,
            "description": self.description,
            "created_at": to_iso(self.created_at),
            "approved_at": to_iso(self.approved_at),
        }
        if self.formula:
            result["formula"] = self.formula
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldMapping":
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            source_table_id=data["source_table_id"],
            source_column_id=data["source_column_id"],
            target_table_id=data["target_table_id"],
            target_column_id=data["target_column_id"],
            transformation_type=TransformationType(data.get("transformation_type", "direct")),
            confidence=int(data.get("confidence", 0)),
            # Fixtures leave status unset, which means "suggested"
            status=MappingStatus(data.get("status") or "suggested"),
            formula=data.get("formula"),
            description=data.get("description", ""),
            created_at=from_iso(data.get("created_at")) or utcnow(),
            approved_at=from_iso(data.get("approved_at")),
        )


@dataclass
class TableMapping:
    """Field mappings and completion metrics for one source/target table pair."""
    source_table_id: str
    target_table_id: str
    field_mappings: List[FieldMapping] = field(default_factory=list)
    completion_percentage: int = 0
    required_fields_covered: int = 0
    total_required_fields: int = 0

    def matches(self, source_table_id: str, target_table_id: str) -> bool:
        return self.source_table_id == source_table_id and self.target_table_id == target_table_id

    def get_field_mapping(self, mapping_id: str) -> Optional[FieldMapping]:
        for mapping in self.field_mappings:
            if mapping.id == mapping_id:
                return mapping
        return None

    @property
    def approved_count(self) -> int:
        return sum(
            1 for m in self.field_mappings
            if m.status in (MappingStatus.APPROVED, MappingStatus.MANUAL)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "source_table_id": self.source_table_id,
            "target_table_id": self.target_table_id,
            "field_mappings": [m.to_dict() for m in self.field_mappings],
            "completion_percentage": self.completion_percentage,
            "required_fields_covered": self.required_fields_covered,
            "total_required_fields": self.total_required_fields,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableMapping":
        """Create from dictionary representation."""
        return cls(
            source_table_id=data["source_table_id"],
            target_table_id=data["target_table_id"],
            field_mappings=[FieldMapping.from_dict(m) for m in data.get("field_mappings", [])],
            completion_percentage=data.get("completion_percentage", 0),
            required_fields_covered=data.get("required_fields_covered", 0),
            total_required_fields=data.get("total_required_fields", 0),
        )


@dataclass
class MappingState:
    """Progress, selection and suggestion ledger of the mapping phase."""
    is_processing: bool = False
    progress: int = 0
    current_step: str = ""
    selected_source_table: Optional[str] = None
    selected_target_table: Optional[str] = None
    current_table_mapping: Optional[TableMapping] = None
    all_mappings: List[TableMapping] = field(default_factory=list)
    suggestions: List[FieldMapping] = field(default_factory=list)
    error: Optional[str] = None
    completed_at: Optional[datetime] = None

    def get_suggestion(self, mapping_id: str) -> Optional[FieldMapping]:
        for suggestion in self.suggestions:
            if suggestion.id == mapping_id:
                return suggestion
        return None

    def find_table_mapping(self, source_table_id: str, target_table_id: str) -> Optional[TableMapping]:
        for mapping in self.all_mappings:
            if mapping.matches(source_table_id, target_table_id):
                return mapping
        return None

    @property
    def all_suggestions_processed(self) -> bool:
        """True when there is at least one suggestion and every one is approved or rejected."""
        return bool(self.suggestions) and all(s.is_processed for s in self.suggestions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "is_processing": self.is_processing,
            "progress": self.progress,
            "current_step": self.current_step,
            "selected_source_table": self.selected_source_table,
            "selected_target_table": self.selected_target_table,
            "current_table_mapping": (
                self.current_table_mapping.to_dict() if self.current_table_mapping else None
            ),
            "all_mappings": [m.to_dict() for m in self.all_mappings],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "error": self.error,
            "completed_at": to_iso(self.completed_at),
        }
