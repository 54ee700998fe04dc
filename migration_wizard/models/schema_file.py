"""Uploaded schema file models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime
import uuid

from .project import SchemaDialect
from .timestamps import utcnow, to_iso, from_iso


class FileStatus(str, Enum):
    """Processing status of an uploaded file."""
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class FileSide(str, Enum):
    """Which side of the migration a file describes."""
    SOURCE = "source"
    TARGET = "target"


@dataclass
class SchemaPreview:
    """Summary derived from a successfully processed schema file."""
    table_count: int
    column_count: int
    sample_tables: List[str] = field(default_factory=list)
    estimated_complexity: str = "simple"  # simple, moderate, complex

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "table_count": self.table_count,
            "column_count": self.column_count,
            "sample_tables": self.sample_tables,
            "estimated_complexity": self.estimated_complexity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaPreview":
        """Create from dictionary representation."""
        return cls(
            table_count=data.get("table_count", 0),
            column_count=data.get("column_count", 0),
            sample_tables=data.get("sample_tables", []),
            estimated_complexity=data.get("estimated_complexity", "simple"),
        )


@dataclass
class SchemaFile:
    """An uploaded schema artifact; the tracker only touches status, preview and error."""
    name: str
    dialect: SchemaDialect
    id: str = field(default_factory=lambda: f"file-{uuid.uuid4().hex[:12]}")
    size: int = 0
    type: str = "text/plain"
    uploaded_at: datetime = field(default_factory=utcnow)
    status: FileStatus = FileStatus.UPLOADING
    preview: Optional[SchemaPreview] = None
    error: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == FileStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "type": self.type,
            "uploaded_at": to_iso(self.uploaded_at),
            "status": self.status.value,
            "dialect": self.dialect.value,
            "preview": self.preview.to_dict() if self.preview else None,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaFile":
        """Create from dictionary representation."""
        preview = data.get("preview")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            size=data.get("size", 0),
            type=data.get("type", "text/plain"),
            uploaded_at=from_iso(data.get("uploaded_at")) or utcnow(),
            status=FileStatus(data.get("status", "uploading")),
            dialect=SchemaDialect(data.get("dialect", "db2")),
            preview=SchemaPreview.from_dict(preview) if preview else None,
            error=data.get("error"),
        )
