"""Discovery and lineage models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime

from .project import SchemaDialect
from .timestamps import to_iso, from_iso


@dataclass
class ColumnNode:
    """A column discovered in a schema."""
    id: str
    name: str
    data_type: str
    nullable: bool = True
    is_primary_key: bool = False
    is_foreign_key: bool = False
    references: Optional[Dict[str, str]] = None  # {"table": ..., "column": ...}
    sample_values: List[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "id": self.id,
            "name": self.name,
            "data_type": self.data_type,
            "nullable": self.nullable,
            "is_primary_key": self.is_primary_key,
            "is_foreign_key": self.is_foreign_key,
        }
        if self.references:
            result["references"] = self.references
        if self.sample_values:
            result["sample_values"] = self.sample_values
        if self.description:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnNode":
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            data_type=data.get("data_type", ""),
            nullable=data.get("nullable", True),
            is_primary_key=data.get("is_primary_key", False),
            is_foreign_key=data.get("is_foreign_key", False),
            references=data.get("references"),
            sample_values=data.get("sample_values", []),
            description=data.get("description", ""),
        )


@dataclass
class TableNode:
    """A table in the lineage graph."""
    id: str
    name: str
    schema: str
    type: str  # source, target, intermediate
    dialect: SchemaDialect
    columns: List[ColumnNode] = field(default_factory=list)
    row_count: Optional[int] = None
    size: Optional[str] = None
    position: Optional[Dict[str, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "schema": self.schema,
            "type": self.type,
            "dialect": self.dialect.value,
            "columns": [c.to_dict() for c in self.columns],
            "row_count": self.row_count,
            "size": self.size,
            "position": self.position,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableNode":
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            schema=data.get("schema", ""),
            type=data.get("type", "source"),
            dialect=SchemaDialect(data.get("dialect", "db2")),
            columns=[ColumnNode.from_dict(c) for c in data.get("columns", [])],
            row_count=data.get("row_count"),
            size=data.get("size"),
            position=data.get("position"),
        )


@dataclass
class Relationship:
    """An inferred key relationship between two tables."""
    id: str
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    relationship_type: str = "one-to-many"
    confidence: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "source_table": self.source_table,
            "source_column": self.source_column,
            "target_table": self.target_table,
            "target_column": self.target_column,
            "relationship_type": self.relationship_type,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Relationship":
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            source_table=data["source_table"],
            source_column=data["source_column"],
            target_table=data["target_table"],
            target_column=data["target_column"],
            relationship_type=data.get("relationship_type", "one-to-many"),
            confidence=data.get("confidence", 1.0),
        )


@dataclass
class TableMappingLine:
    """A source-to-target table flow drawn on the lineage graph."""
    id: str
    source_table: str
    target_table: str
    confidence: float
    path: List[Dict[str, float]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "source_table": self.source_table,
            "target_table": self.target_table,
            "confidence": self.confidence,
            "path": self.path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableMappingLine":
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            source_table=data["source_table"],
            target_table=data["target_table"],
            confidence=data.get("confidence", 0.0),
            path=data.get("path", []),
        )


@dataclass
class LineageGraph:
    """Discovered tables, columns and their relationships."""
    tables: List[TableNode] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)
    mappings: List[TableMappingLine] = field(default_factory=list)
    complexity_score: float = 0.0

    @property
    def statistics(self) -> Dict[str, Any]:
        """Summary counts over the graph."""
        return {
            "total_tables": len(self.tables),
            "total_columns": sum(len(t.columns) for t in self.tables),
            "total_relationships": len(self.relationships),
            "total_mappings": len(self.mappings),
            "complexity_score": self.complexity_score,
        }

    def get_table(self, table_id: str) -> Optional[TableNode]:
        """Get a table by ID or name."""
        for table in self.tables:
            if table.id == table_id or table.name == table_id:
                return table
        return None

    def search_columns(self, term: str) -> List[ColumnNode]:
        """Find columns whose name or description contains the term."""
        term = term.lower()
        return [
            column
            for table in self.tables
            for column in table.columns
            if term in column.name.lower() or term in column.description.lower()
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "tables": [t.to_dict() for t in self.tables],
            "relationships": [r.to_dict() for r in self.relationships],
            "mappings": [m.to_dict() for m in self.mappings],
            "statistics": self.statistics,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineageGraph":
        """Create from dictionary representation."""
        return cls(
            tables=[TableNode.from_dict(t) for t in data.get("tables", [])],
            relationships=[Relationship.from_dict(r) for r in data.get("relationships", [])],
            mappings=[TableMappingLine.from_dict(m) for m in data.get("mappings", [])],
            complexity_score=data.get("statistics", {}).get("complexity_score", 0.0),
        )


@dataclass
class DiscoveryState:
    """Progress and result of the discovery phase."""
    is_processing: bool = False
    progress: int = 0
    current_step: str = ""
    lineage_graph: Optional[LineageGraph] = None
    error: Optional[str] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "is_processing": self.is_processing,
            "progress": self.progress,
            "current_step": self.current_step,
            "lineage_graph": self.lineage_graph.to_dict() if self.lineage_graph else None,
            "error": self.error,
            "completed_at": to_iso(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiscoveryState":
        """Create from dictionary representation."""
        graph = data.get("lineage_graph")
        return cls(
            is_processing=data.get("is_processing", False),
            progress=data.get("progress", 0),
            current_step=data.get("current_step", ""),
            lineage_graph=LineageGraph.from_dict(graph) if graph else None,
            error=data.get("error"),
            completed_at=from_iso(data.get("completed_at")),
        )
