"""Code generation models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime

from .timestamps import utcnow, to_iso, from_iso


class CodePlatform(str, Enum):
    """Fixed code-generation targets."""
    BIGQUERY = "bigquery"
    DATABRICKS = "databricks"
    PYTHON_BEAM = "python-beam"
    DBT = "dbt"


PLATFORM_INFO = {
    CodePlatform.BIGQUERY: {
        "name": "BigQuery SQL",
        "description": "Google Cloud BigQuery native SQL with optimizations",
        "features": ["Serverless", "Petabyte scale", "ANSI SQL", "Machine Learning"],
        "use_case": "Large-scale analytics and data warehousing",
    },
    CodePlatform.DATABRICKS: {
        "name": "Databricks SQL",
        "description": "Delta Lake optimized SQL for unified analytics",
        "features": ["Delta Lake", "Auto-optimization", "Unity Catalog", "Real-time"],
        "use_case": "Unified data lakehouse with streaming support",
    },
    CodePlatform.PYTHON_BEAM: {
        "name": "Python/Beam",
        "description": "Apache Beam pipeline for batch and streaming",
        "features": ["Multi-cloud", "Streaming", "Batch processing", "Portable"],
        "use_case": "Complex ETL pipelines and real-time processing",
    },
    CodePlatform.DBT: {
        "name": "dbt Models",
        "description": "Data build tool for analytics engineering",
        "features": ["Version control", "Testing", "Documentation", "Lineage"],
        "use_case": "Analytics engineering and data transformation",
    },
}


@dataclass
class GeneratedCode:
    """A generated code artifact for one platform."""
    platform: CodePlatform
    content: str
    file_name: str
    language: str
    last_generated: datetime = field(default_factory=utcnow)

    @property
    def size(self) -> int:
        """Size of the content in characters."""
        return len(self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "platform": self.platform.value,
            "content": self.content,
            "file_name": self.file_name,
            "language": self.language,
            "size": self.size,
            "last_generated": to_iso(self.last_generated),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratedCode":
        """Create from dictionary representation."""
        return cls(
            platform=CodePlatform(data["platform"]),
            content=data.get("content", ""),
            file_name=data.get("file_name", ""),
            language=data.get("language", "sql"),
            last_generated=from_iso(data.get("last_generated")) or utcnow(),
        )


@dataclass
class CodeOptimization:
    """A suggested improvement to generated code."""
    id: str
    type: str  # performance, readability, best-practice, cost-optimization
    title: str
    description: str
    suggestion: str
    impact: str = "low"  # low, medium, high
    auto_applicable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "suggestion": self.suggestion,
            "impact": self.impact,
            "auto_applicable": self.auto_applicable,
        }


@dataclass
class CodeGenerationState:
    """Progress and per-platform artifacts of the code generation phase."""
    is_processing: bool = False
    progress: int = 0
    current_step: str = ""
    selected_platform: CodePlatform = CodePlatform.BIGQUERY
    generated_codes: Dict[CodePlatform, Optional[GeneratedCode]] = field(
        default_factory=lambda: {platform: None for platform in CodePlatform}
    )
    optimizations: List[CodeOptimization] = field(default_factory=list)
    preview_mode: str = "code"  # code, execution, performance
    error: Optional[str] = None
    completed_at: Optional[datetime] = None
    original_code_for_comparison: str = ""
    optimized_code_for_comparison: str = ""

    @property
    def current_code(self) -> Optional[GeneratedCode]:
        return self.generated_codes.get(self.selected_platform)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "is_processing": self.is_processing,
            "progress": self.progress,
            "current_step": self.current_step,
            "selected_platform": self.selected_platform.value,
            "generated_codes": {
                platform.value: code.to_dict() if code else None
                for platform, code in self.generated_codes.items()
            },
            "optimizations": [o.to_dict() for o in self.optimizations],
            "preview_mode": self.preview_mode,
            "error": self.error,
            "completed_at": to_iso(self.completed_at),
            "original_code_for_comparison": self.original_code_for_comparison,
            "optimized_code_for_comparison": self.optimized_code_for_comparison,
        }
