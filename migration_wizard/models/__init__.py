"""Data models for the migration wizard."""

from .project import (
    MigrationPhase,
    ProjectStatus,
    SchemaDialect,
    ProjectProgress,
    Project,
    ProjectTemplate,
    UserProfile,
)
from .schema_file import (
    FileStatus,
    FileSide,
    SchemaPreview,
    SchemaFile,
)
from .lineage import (
    ColumnNode,
    TableNode,
    Relationship,
    TableMappingLine,
    LineageGraph,
    DiscoveryState,
)
from .mapping import (
    TransformationType,
    MappingStatus,
    FieldMapping,
    TableMapping,
    MappingState,
    HIGH_CONFIDENCE_THRESHOLD,
)
from .validation import (
    ChecklistItem,
    ValidationChecklist,
)
from .codegen import (
    CodePlatform,
    GeneratedCode,
    CodeOptimization,
    CodeGenerationState,
    PLATFORM_INFO,
)

__all__ = [
    "MigrationPhase",
    "ProjectStatus",
    "SchemaDialect",
    "ProjectProgress",
    "Project",
    "ProjectTemplate",
    "UserProfile",
    "FileStatus",
    "FileSide",
    "SchemaPreview",
    "SchemaFile",
    "ColumnNode",
    "TableNode",
    "Relationship",
    "TableMappingLine",
    "LineageGraph",
    "DiscoveryState",
    "TransformationType",
    "MappingStatus",
    "FieldMapping",
    "TableMapping",
    "MappingState",
    "HIGH_CONFIDENCE_THRESHOLD",
    "ChecklistItem",
    "ValidationChecklist",
    "CodePlatform",
    "GeneratedCode",
    "CodeOptimization",
    "CodeGenerationState",
    "PLATFORM_INFO",
]
