"""Pluggable providers for lineage, mapping suggestions and generated code."""

import copy
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..fixtures import (
    LINEAGE_GRAPH,
    SUGGESTIONS,
    TABLE_MAPPINGS,
    GENERATED_CODE,
    CODE_OPTIMIZATIONS,
)
from ..models.schema_file import SchemaFile
from ..models.lineage import LineageGraph
from ..models.mapping import FieldMapping, TableMapping
from ..models.codegen import CodePlatform, GeneratedCode, CodeOptimization
from ..models.timestamps import utcnow

logger = logging.getLogger(__name__)


class LineageProvider(ABC):
    """Builds a lineage graph from uploaded schema files."""

    @abstractmethod
    def discover(self, source_files: List[SchemaFile], target_files: List[SchemaFile]) -> LineageGraph:
        """
        Discover tables, columns and relationships.

        Args:
            source_files: Processed source schema files
            target_files: Processed target schema files

        Returns:
            The discovered LineageGraph
        """
        pass


class SuggestionProvider(ABC):
    """Proposes field mappings between source and target columns."""

    @abstractmethod
    def suggest(self, table_mapping: Optional[TableMapping] = None) -> List[FieldMapping]:
        """
        Suggest field mappings.

        Args:
            table_mapping: The currently selected table pair, if any

        Returns:
            Suggestions with status ``suggested``
        """
        pass

    def table_mappings(self) -> List[TableMapping]:
        """Table mappings to seed the mapping phase with; none by default."""
        return []


class CodeProvider(ABC):
    """Generates migration code for a target platform."""

    @abstractmethod
    def generate(self, platform: CodePlatform, mappings: List[TableMapping]) -> GeneratedCode:
        """
        Generate code for one platform.

        Args:
            platform: Target platform
            mappings: Table mappings approved in the mapping phase

        Returns:
            A GeneratedCode artifact stamped with the generation time
        """
        pass

    def optimizations(self, platform: CodePlatform) -> List[CodeOptimization]:
        return []


class FixtureLineageProvider(LineageProvider):
    """Returns the canned insurance lineage graph regardless of input."""

    def discover(self, source_files: List[SchemaFile], target_files: List[SchemaFile]) -> LineageGraph:
        logger.info(
            f"Building lineage for {len(source_files)} source and {len(target_files)} target files"
        )
        return LineageGraph.from_dict(copy.deepcopy(LINEAGE_GRAPH))


class FixtureSuggestionProvider(SuggestionProvider):
    """Returns the canned customer and order suggestions."""

    def suggest(self, table_mapping: Optional[TableMapping] = None) -> List[FieldMapping]:
        now = utcnow()
        suggestions = []
        for data in SUGGESTIONS:
            mapping = FieldMapping.from_dict(data)
            mapping.created_at = now
            suggestions.append(mapping)
        return suggestions

    def table_mappings(self) -> List[TableMapping]:
        return [TableMapping.from_dict(copy.deepcopy(data)) for data in TABLE_MAPPINGS]


class FixtureCodeProvider(CodeProvider):
    """Returns the canned code template for each platform."""

    def generate(self, platform: CodePlatform, mappings: List[TableMapping]) -> GeneratedCode:
        template = GENERATED_CODE[platform.value]
        return GeneratedCode(
            platform=platform,
            content=template["content"],
            file_name=template["file_name"],
            language=template["language"],
            last_generated=utcnow(),
        )

    def optimizations(self, platform: CodePlatform) -> List[CodeOptimization]:
        return [CodeOptimization(**data) for data in CODE_OPTIMIZATIONS]
