"""Tests for the async workflow runner."""

from typing import List

import pytest

from migration_wizard.models.project import SchemaDialect
from migration_wizard.models.schema_file import FileSide, FileStatus, SchemaFile
from migration_wizard.models.lineage import LineageGraph
from migration_wizard.models.codegen import CodePlatform
from migration_wizard.services.providers import LineageProvider
from migration_wizard.services.runner import WorkflowRunner
from migration_wizard.tracker import MigrationTracker

from .conftest import SOURCE_DDL, TARGET_DDL


class BrokenLineageProvider(LineageProvider):

    def discover(self, source_files: List[SchemaFile], target_files: List[SchemaFile]) -> LineageGraph:
        raise RuntimeError("catalog unavailable")


@pytest.fixture
def runner(tracker_with_project) -> WorkflowRunner:
    return WorkflowRunner(tracker_with_project)


class TestFileProcessing:

    @pytest.mark.asyncio
    async def test_process_file(self, runner):
        file = SchemaFile(name="source.sql", dialect=SchemaDialect.DB2)

        await runner.process_file(file, SOURCE_DDL, FileSide.SOURCE)

        assert file.status == FileStatus.COMPLETED
        assert file.preview.table_count == 2
        assert runner.tracker.source_files == [file]
        assert runner.notifications.recent(1)[0].level == "success"

    @pytest.mark.asyncio
    async def test_unparseable_file(self, runner):
        file = SchemaFile(name="notes.txt", dialect=SchemaDialect.DB2)

        await runner.process_file(file, "just some notes", FileSide.SOURCE)

        assert file.status == FileStatus.ERROR
        assert file.error
        assert file.preview is None
        assert runner.notifications.recent(1)[0].level == "error"

    def test_read_error(self, runner):
        file = SchemaFile(name="missing.sql", dialect=SchemaDialect.DB2)

        runner.record_read_error(file, FileSide.TARGET, "Failed to read file: not found")

        assert runner.tracker.target_files == [file]
        assert file.status == FileStatus.ERROR
        assert file.error == "Failed to read file: not found"
        assert runner.notifications.recent(1)[0].level == "error"
        assert runner.tracker.can_proceed_to_next_phase() is False

    @pytest.mark.asyncio
    async def test_upload_files(self, runner):
        uploads = [
            (SchemaFile(name="s.sql", dialect=SchemaDialect.DB2), SOURCE_DDL, FileSide.SOURCE),
            (SchemaFile(name="t.sql", dialect=SchemaDialect.BIGQUERY), TARGET_DDL, FileSide.TARGET),
        ]

        files = await runner.upload_files(uploads)

        assert [f.status for f in files] == [FileStatus.COMPLETED, FileStatus.COMPLETED]
        assert runner.tracker.upload_progress == 100
        assert runner.tracker.can_proceed_to_next_phase() is True


class TestPhaseRuns:

    @pytest.mark.asyncio
    async def test_discovery(self, runner):
        assert await runner.run_discovery() is True

        state = runner.tracker.discovery_state
        assert state.progress == 100
        assert state.completed_at is not None
        assert state.lineage_graph.statistics["total_tables"] == 7

    @pytest.mark.asyncio
    async def test_discovery_failure_recorded(self, storage, config, project):
        tracker = MigrationTracker(storage, config, lineage_provider=BrokenLineageProvider())
        tracker.set_current_project(project)
        runner = WorkflowRunner(tracker)

        assert await runner.run_discovery() is False

        assert tracker.discovery_state.error == "catalog unavailable"
        assert tracker.discovery_state.is_processing is False
        assert tracker.discovery_state.completed_at is None
        assert runner.notifications.recent(1)[0].title == "Discovery failed"

    @pytest.mark.asyncio
    async def test_mapping(self, runner):
        assert await runner.run_mapping() is True

        state = runner.tracker.mapping_state
        assert state.is_processing is False
        assert len(state.all_mappings) == 2
        assert len(state.suggestions) == 9
        assert state.current_table_mapping.source_table_id == "customers"
        assert state.completed_at is None

    @pytest.mark.asyncio
    async def test_code_generation(self, runner):
        code = await runner.run_code_generation(CodePlatform.DBT)

        state = runner.tracker.code_generation_state
        assert code is state.generated_codes[CodePlatform.DBT]
        assert state.selected_platform == CodePlatform.DBT
        assert state.progress == 100
        assert state.is_processing is False
