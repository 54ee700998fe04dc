"""Service layer for the migration wizard."""

from .storage import JsonFileStorage, MemoryStorage, STATE_KEY, PROJECTS_KEY
from .catalog import ProjectCatalog, build_default_project
from .providers import (
    LineageProvider,
    SuggestionProvider,
    CodeProvider,
    FixtureLineageProvider,
    FixtureSuggestionProvider,
    FixtureCodeProvider,
)
from .ddl_parser import build_preview, parse_ddl_tables
from .notifications import Notification, NotificationFeed
from .runner import WorkflowRunner
from .export import export_project, write_mapping_report

__all__ = [
    "JsonFileStorage",
    "MemoryStorage",
    "STATE_KEY",
    "PROJECTS_KEY",
    "ProjectCatalog",
    "build_default_project",
    "LineageProvider",
    "SuggestionProvider",
    "CodeProvider",
    "FixtureLineageProvider",
    "FixtureSuggestionProvider",
    "FixtureCodeProvider",
    "build_preview",
    "parse_ddl_tables",
    "Notification",
    "NotificationFeed",
    "WorkflowRunner",
    "export_project",
    "write_mapping_report",
]
