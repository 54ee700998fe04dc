"""Project and phase-progress models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime
import uuid

from .timestamps import utcnow, to_iso, from_iso


class MigrationPhase(str, Enum):
    """Ordered stages of the migration wizard."""
    UPLOAD = "upload"
    DISCOVERY = "discovery"
    MAPPING = "mapping"
    CODEGEN = "codegen"
    VALIDATION = "validation"

    @property
    def index(self) -> int:
        """Position of the phase in the wizard sequence."""
        return list(MigrationPhase).index(self)

    def next(self) -> Optional["MigrationPhase"]:
        """Get the phase that follows this one, or None for the last phase."""
        phases = list(MigrationPhase)
        if self.index + 1 < len(phases):
            return phases[self.index + 1]
        return None


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""
    DRAFT = "draft"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    FAILED = "failed"


class SchemaDialect(str, Enum):
    """Schema dialects a project can migrate between."""
    DB2 = "db2"
    COBOL = "cobol"
    BIGQUERY = "bigquery"
    SNOWFLAKE = "snowflake"
    POSTGRES = "postgres"
    CUSTOM_JSON = "custom-json"

    @property
    def display_name(self) -> str:
        return DIALECT_DISPLAY_NAMES[self]


DIALECT_DISPLAY_NAMES = {
    SchemaDialect.DB2: "IBM DB2",
    SchemaDialect.COBOL: "COBOL Copybooks",
    SchemaDialect.BIGQUERY: "Google BigQuery",
    SchemaDialect.SNOWFLAKE: "Snowflake",
    SchemaDialect.POSTGRES: "PostgreSQL",
    SchemaDialect.CUSTOM_JSON: "Custom JSON Schema",
}


@dataclass
class ProjectProgress:
    """Phase position and completion flags of a project."""
    current_phase: MigrationPhase = MigrationPhase.UPLOAD
    completed_phases: List[MigrationPhase] = field(default_factory=list)
    schemas_uploaded: bool = False
    mappings_complete: bool = False
    code_generated: bool = False
    validation_complete: bool = False

    def mark_completed(self, phase: MigrationPhase) -> None:
        """Record a phase as completed; recording twice is a no-op."""
        if phase not in self.completed_phases:
            self.completed_phases.append(phase)
            self.completed_phases.sort(key=lambda p: p.index)

    @property
    def percent_complete(self) -> float:
        """Share of wizard phases completed, 0-100."""
        return len(self.completed_phases) / len(MigrationPhase) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "current_phase": self.current_phase.value,
            "completed_phases": [p.value for p in self.completed_phases],
            "schemas_uploaded": self.schemas_uploaded,
            "mappings_complete": self.mappings_complete,
            "code_generated": self.code_generated,
            "validation_complete": self.validation_complete,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectProgress":
        """Create from dictionary representation."""
        progress = cls(
            current_phase=MigrationPhase(data.get("current_phase", "upload")),
            schemas_uploaded=data.get("schemas_uploaded", False),
            mappings_complete=data.get("mappings_complete", False),
            code_generated=data.get("code_generated", False),
            validation_complete=data.get("validation_complete", False),
        )
        for phase in data.get("completed_phases", []):
            progress.mark_completed(MigrationPhase(phase))
        return progress


@dataclass
class Project:
    """A migration project and its progress record."""
    name: str
    source_dialect: SchemaDialect
    target_dialect: SchemaDialect
    id: str = field(default_factory=lambda: f"proj-{uuid.uuid4().hex[:8]}")
    description: str = ""
    status: ProjectStatus = ProjectStatus.DRAFT
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    progress: ProjectProgress = field(default_factory=ProjectProgress)

    def touch(self, when: Optional[datetime] = None) -> None:
        """Bump the update timestamp."""
        self.updated_at = when or utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "source_dialect": self.source_dialect.value,
            "target_dialect": self.target_dialect.value,
            "status": self.status.value,
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
            "progress": self.progress.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            source_dialect=SchemaDialect(data.get("source_dialect", "db2")),
            target_dialect=SchemaDialect(data.get("target_dialect", "bigquery")),
            status=ProjectStatus(data.get("status", "draft")),
            created_at=from_iso(data.get("created_at")) or utcnow(),
            updated_at=from_iso(data.get("updated_at")) or utcnow(),
            progress=ProjectProgress.from_dict(data.get("progress", {})),
        )


@dataclass
class ProjectTemplate:
    """A canned starting point for a new project."""
    id: str
    name: str
    description: str
    source_dialect: SchemaDialect
    target_dialect: SchemaDialect
    estimated_duration: str = ""
    complexity: str = "intermediate"  # beginner, intermediate, advanced
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "source_dialect": self.source_dialect.value,
            "target_dialect": self.target_dialect.value,
            "estimated_duration": self.estimated_duration,
            "complexity": self.complexity,
            "tags": self.tags,
        }


@dataclass
class UserProfile:
    """Display-only identity filled in by the authentication provider."""
    id: str = ""
    name: str = "Alex Chen"
    email: str = ""
    picture: Optional[str] = None
    authenticated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "picture": self.picture,
            "authenticated": self.authenticated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        """Create from dictionary representation."""
        return cls(
            id=data.get("id", ""),
            name=data.get("name", "Alex Chen"),
            email=data.get("email", ""),
            picture=data.get("picture"),
            authenticated=data.get("authenticated", False),
        )
