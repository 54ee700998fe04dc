"""Tests for the project catalog."""

import pytest

from migration_wizard.errors import NotFoundError
from migration_wizard.models.project import MigrationPhase, ProjectStatus, SchemaDialect
from migration_wizard.services.catalog import ProjectCatalog, build_default_project
from migration_wizard.services.storage import MemoryStorage


@pytest.fixture
def catalog() -> ProjectCatalog:
    return ProjectCatalog(MemoryStorage())


class TestProjectCatalog:

    def test_base_projects_listed(self, catalog):
        ids = [p.id for p in catalog.list_projects()]
        assert ids == ["proj-1", "proj-2", "proj-3"]

    def test_create_from_template(self, catalog):
        project = catalog.create_project("Claims move", template="template-1")

        assert project.status == ProjectStatus.DRAFT
        assert project.source_dialect == SchemaDialect.DB2
        assert project.target_dialect == SchemaDialect.BIGQUERY
        assert project.progress.current_phase == MigrationPhase.UPLOAD
        assert catalog.get_project(project.id).name == "Claims move"

    def test_create_with_dialects(self, catalog):
        project = catalog.create_project("Ledger", source_dialect="cobol", target_dialect="snowflake")
        assert project.source_dialect == SchemaDialect.COBOL

    def test_create_requires_dialects(self, catalog):
        with pytest.raises(ValueError):
            catalog.create_project("Nothing", source_dialect=SchemaDialect.DB2)

    def test_saved_project_overrides_base(self, catalog):
        project = catalog.get_project("proj-1")
        project.status = ProjectStatus.FAILED
        catalog.save_project(project)

        projects = catalog.list_projects()
        assert len(projects) == 3
        assert catalog.get_project("proj-1").status == ProjectStatus.FAILED

    def test_unknown_project(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.get_project("proj-404")

    def test_template_by_name(self, catalog):
        assert catalog.get_template("DB2 to BigQuery Enterprise").id == "template-1"
        with pytest.raises(NotFoundError):
            catalog.get_template("template-99")

    def test_default_project(self, catalog):
        project = build_default_project(catalog.get_template("template-1"))
        assert project.id == "proj-template-1"
        assert project.status == ProjectStatus.COMPLETED
        assert project.progress.current_phase == MigrationPhase.VALIDATION
        assert project.progress.percent_complete == 100
