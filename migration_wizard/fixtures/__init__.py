"""Canned data standing in for real schema analysis, inference and code generation."""

from .projects import BASE_PROJECTS, PROJECT_TEMPLATES
from .lineage import LINEAGE_GRAPH, DISCOVERY_STEPS
from .mappings import SUGGESTIONS, TABLE_MAPPINGS, MAPPING_STEPS
from .codegen import GENERATED_CODE, CODE_OPTIMIZATIONS, CODEGEN_STEPS, SCHEMA_FILE_STEPS

__all__ = [
    "BASE_PROJECTS",
    "PROJECT_TEMPLATES",
    "LINEAGE_GRAPH",
    "DISCOVERY_STEPS",
    "SUGGESTIONS",
    "TABLE_MAPPINGS",
    "MAPPING_STEPS",
    "GENERATED_CODE",
    "CODE_OPTIMIZATIONS",
    "CODEGEN_STEPS",
    "SCHEMA_FILE_STEPS",
]
