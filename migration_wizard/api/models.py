"""Pydantic models for API requests and responses."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from ..models.project import MigrationPhase, SchemaDialect
from ..models.schema_file import FileSide, FileStatus
from ..models.mapping import MappingStatus, TransformationType
from ..models.codegen import CodePlatform


# Request Models
class ProjectCreate(BaseModel):
    name: str
    template: Optional[str] = None
    source_dialect: Optional[SchemaDialect] = None
    target_dialect: Optional[SchemaDialect] = None
    description: str = ""


class ProjectSelect(BaseModel):
    """Select a catalog project; a null ID clears the current project."""
    project_id: Optional[str] = None


class PhaseUpdate(BaseModel):
    phase: MigrationPhase
    force: bool = False


class FileUpload(BaseModel):
    name: str
    side: FileSide
    dialect: SchemaDialect
    content: str
    type: str = "text/plain"


class FileStatusUpdate(BaseModel):
    status: FileStatus
    error: Optional[str] = None


class TableSelection(BaseModel):
    source_table_id: str
    target_table_id: str


class FieldMappingCreate(BaseModel):
    id: Optional[str] = None
    source_table_id: str
    source_column_id: str
    target_table_id: str
    target_column_id: str
    transformation_type: TransformationType = TransformationType.DIRECT
    confidence: int = Field(default=100, ge=0, le=100)
    formula: Optional[str] = None
    description: str = ""


class FieldMappingUpdate(BaseModel):
    status: Optional[MappingStatus] = None
    transformation_type: Optional[TransformationType] = None
    confidence: Optional[int] = Field(default=None, ge=0, le=100)
    formula: Optional[str] = None
    description: Optional[str] = None


class CodeGenerationRequest(BaseModel):
    platform: Optional[CodePlatform] = None


class ChecklistUpdate(BaseModel):
    completed: bool


class ExportRequest(BaseModel):
    output_dir: Optional[str] = None
    organize_by_platform: bool = False


class UserProfileUpdate(BaseModel):
    id: str = ""
    name: str
    email: str = ""
    picture: Optional[str] = None


# Response Models
class PhaseResponse(BaseModel):
    current_phase: MigrationPhase
    can_proceed: bool
    completed_phases: List[MigrationPhase] = Field(default_factory=list)


class BulkAcceptResponse(BaseModel):
    approved: int
    suggestions: List[Dict[str, Any]]


class ExportResponse(BaseModel):
    code_files: List[str]
    readme: str
    mapping_report: Optional[str] = None


class NotificationListResponse(BaseModel):
    notifications: List[Dict[str, Any]]
    total: int
