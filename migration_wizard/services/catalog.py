"""Project catalog and the initial-state policy."""

import logging
from typing import Any, Dict, List, Optional

from ..errors import NotFoundError
from ..fixtures import BASE_PROJECTS, PROJECT_TEMPLATES
from ..models.project import (
    MigrationPhase,
    Project,
    ProjectProgress,
    ProjectStatus,
    ProjectTemplate,
    SchemaDialect,
)
from .storage import PROJECTS_KEY

logger = logging.getLogger(__name__)


class ProjectCatalog:
    """
    Lists, creates and saves projects.

    The catalog is the canned base projects overlaid with every project that
    has been saved to storage; a saved project replaces the base project with
    the same ID.
    """

    def __init__(
        self,
        storage,
        templates: Optional[List[ProjectTemplate]] = None,
        base_projects: Optional[List[Dict[str, Any]]] = None,
    ):
        """
        Initialize the catalog.

        Args:
            storage: Storage exposing get/set
            templates: Project templates (defaults to the canned templates)
            base_projects: Projects always listed (defaults to the canned projects)
        """
        self.storage = storage
        self.templates = templates if templates is not None else list(PROJECT_TEMPLATES)
        self._base_projects = base_projects if base_projects is not None else BASE_PROJECTS

    def _saved(self) -> List[Dict[str, Any]]:
        return self.storage.get(PROJECTS_KEY, []) or []

    def list_projects(self) -> List[Project]:
        """List base projects merged with saved projects."""
        saved = {p["id"]: p for p in self._saved()}
        projects = []
        for data in self._base_projects:
            projects.append(Project.from_dict(saved.pop(data["id"], data)))
        for data in saved.values():
            projects.append(Project.from_dict(data))
        return projects

    def get_project(self, project_id: str) -> Project:
        """
        Get a project by ID.

        Raises:
            NotFoundError: If no project has the ID
        """
        for project in self.list_projects():
            if project.id == project_id:
                return project
        raise NotFoundError(f"Project not found: {project_id}")

    def save_project(self, project: Project) -> None:
        """Insert or overwrite a project in storage."""
        saved = [p for p in self._saved() if p["id"] != project.id]
        saved.append(project.to_dict())
        self.storage.set(PROJECTS_KEY, saved)
        logger.debug(f"Saved project {project.id} ({project.status.value})")

    def list_templates(self) -> List[ProjectTemplate]:
        return list(self.templates)

    def get_template(self, key: str) -> ProjectTemplate:
        """
        Get a template by ID or name.

        Raises:
            NotFoundError: If no template matches
        """
        for template in self.templates:
            if key in (template.id, template.name):
                return template
        raise NotFoundError(f"Template not found: {key}")

    def create_project(
        self,
        name: str,
        template: Optional[str] = None,
        source_dialect: Optional[SchemaDialect] = None,
        target_dialect: Optional[SchemaDialect] = None,
        description: str = "",
    ) -> Project:
        """
        Create and save a new draft project.

        Args:
            name: Project name
            template: Template ID or name providing the dialects and description
            source_dialect: Source dialect, overriding the template
            target_dialect: Target dialect, overriding the template

        Returns:
            The new project at the upload phase
        """
        tmpl = self.get_template(template) if template else None
        source = source_dialect or (tmpl.source_dialect if tmpl else None)
        target = target_dialect or (tmpl.target_dialect if tmpl else None)
        if source is None or target is None:
            raise ValueError("A template or both source and target dialects are required")

        project = Project(
            name=name,
            description=description or (tmpl.description if tmpl else ""),
            source_dialect=SchemaDialect(source),
            target_dialect=SchemaDialect(target),
        )
        self.save_project(project)
        logger.info(f"Created project {project.id}: {name}")
        return project


def build_default_project(template: ProjectTemplate) -> Project:
    """
    Build the demo project shown when no state has been persisted yet.

    The demo project is a finished migration: status completed, positioned at
    the validation phase with every phase recorded and every flag set.
    """
    progress = ProjectProgress(
        current_phase=MigrationPhase.VALIDATION,
        schemas_uploaded=True,
        mappings_complete=True,
        code_generated=True,
        validation_complete=True,
    )
    for phase in MigrationPhase:
        progress.mark_completed(phase)

    return Project(
        id=f"proj-{template.id}",
        name=template.name,
        description=template.description,
        source_dialect=template.source_dialect,
        target_dialect=template.target_dialect,
        status=ProjectStatus.COMPLETED,
        progress=progress,
    )
