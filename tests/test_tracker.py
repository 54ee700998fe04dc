"""Tests for phase navigation, gating and project completion."""

from datetime import datetime, timedelta, timezone

import pytest

from migration_wizard.config import WizardConfig
from migration_wizard.errors import PhaseTransitionError
from migration_wizard.models.project import MigrationPhase, ProjectStatus, SchemaDialect
from migration_wizard.models.schema_file import FileStatus
from migration_wizard.models.codegen import CodePlatform, GeneratedCode
from migration_wizard.services.storage import STATE_KEY
from migration_wizard.tracker import MigrationTracker


class TestUploadGate:
    """The upload gate needs completed files on both sides."""

    def test_no_files(self, tracker_with_project):
        assert tracker_with_project.can_proceed_to_next_phase() is False

    def test_only_source_files(self, tracker_with_project, make_completed_file):
        tracker_with_project.add_source_file(make_completed_file("a.sql", SchemaDialect.DB2))
        assert tracker_with_project.can_proceed_to_next_phase() is False

    def test_all_completed(self, uploaded_tracker):
        assert uploaded_tracker.can_proceed_to_next_phase() is True

    def test_file_still_processing(self, uploaded_tracker, make_completed_file):
        pending = make_completed_file("b.sql", SchemaDialect.DB2)
        pending.status = FileStatus.PROCESSING
        uploaded_tracker.add_source_file(pending)
        assert uploaded_tracker.can_proceed_to_next_phase() is False

    def test_gate_does_not_mutate(self, uploaded_tracker):
        before = uploaded_tracker.to_dict()
        uploaded_tracker.can_proceed_to_next_phase()
        uploaded_tracker.can_proceed_to_next_phase()
        assert uploaded_tracker.to_dict() == before


class TestPhaseTransitions:
    """Moving between phases."""

    def test_advance_records_previous_phase(self, uploaded_tracker, storage):
        uploaded_tracker.set_current_phase(MigrationPhase.DISCOVERY)

        project = uploaded_tracker.current_project
        assert uploaded_tracker.current_phase == MigrationPhase.DISCOVERY
        assert project.progress.current_phase == MigrationPhase.DISCOVERY
        assert project.progress.completed_phases == [MigrationPhase.UPLOAD]
        assert project.status == ProjectStatus.IN_PROGRESS
        assert storage.get(STATE_KEY)["current_phase"] == "discovery"

    def test_closed_gate_refused(self, tracker_with_project):
        with pytest.raises(PhaseTransitionError):
            tracker_with_project.set_current_phase(MigrationPhase.DISCOVERY)

        assert tracker_with_project.current_phase == MigrationPhase.UPLOAD
        assert tracker_with_project.current_project.progress.completed_phases == []
        assert tracker_with_project.current_project.status == ProjectStatus.DRAFT

    def test_skipping_refused(self, uploaded_tracker):
        with pytest.raises(PhaseTransitionError):
            uploaded_tracker.set_current_phase(MigrationPhase.MAPPING)

    def test_force_skips_gating(self, tracker_with_project):
        tracker_with_project.set_current_phase(MigrationPhase.CODEGEN, force=True)

        assert tracker_with_project.current_phase == MigrationPhase.CODEGEN
        assert MigrationPhase.UPLOAD in tracker_with_project.current_project.progress.completed_phases

    def test_backward_always_allowed(self, uploaded_tracker):
        uploaded_tracker.set_current_phase(MigrationPhase.DISCOVERY)
        uploaded_tracker.set_current_phase(MigrationPhase.UPLOAD)

        progress = uploaded_tracker.current_project.progress
        assert uploaded_tracker.current_phase == MigrationPhase.UPLOAD
        assert progress.completed_phases == [MigrationPhase.UPLOAD, MigrationPhase.DISCOVERY]

    def test_completed_phase_reopens_gate(self, uploaded_tracker):
        uploaded_tracker.set_current_phase(MigrationPhase.DISCOVERY)
        uploaded_tracker.set_current_phase(MigrationPhase.UPLOAD)
        uploaded_tracker.clear_files()

        uploaded_tracker.set_current_phase(MigrationPhase.DISCOVERY)
        assert uploaded_tracker.current_phase == MigrationPhase.DISCOVERY

    def test_same_phase_is_noop(self, tracker_with_project, storage):
        before = tracker_with_project.current_project.updated_at
        storage.delete(STATE_KEY)

        tracker_with_project.set_current_phase(MigrationPhase.UPLOAD)

        assert tracker_with_project.current_project.updated_at == before
        assert storage.get(STATE_KEY) is None

    def test_without_gating_any_phase_accepted(self, storage, project):
        tracker = MigrationTracker(storage, WizardConfig(enforce_gating=False, default_template=None))
        tracker.set_current_project(project)

        tracker.set_current_phase(MigrationPhase.VALIDATION)
        tracker.set_current_phase(MigrationPhase.MAPPING)

        completed = tracker.current_project.progress.completed_phases
        assert tracker.current_phase == MigrationPhase.MAPPING
        assert completed == [MigrationPhase.UPLOAD, MigrationPhase.VALIDATION]

    def test_completed_phases_never_shrink(self, uploaded_tracker):
        seen = set()
        for phase, force in [
            (MigrationPhase.DISCOVERY, False),
            (MigrationPhase.UPLOAD, False),
            (MigrationPhase.MAPPING, True),
            (MigrationPhase.DISCOVERY, False),
            (MigrationPhase.VALIDATION, True),
        ]:
            uploaded_tracker.set_current_phase(phase, force=force)
            completed = set(uploaded_tracker.current_project.progress.completed_phases)
            assert seen <= completed
            seen = completed

    def test_phase_change_saves_project_to_catalog(self, uploaded_tracker):
        uploaded_tracker.set_current_phase(MigrationPhase.DISCOVERY)

        saved = uploaded_tracker.catalog.get_project(uploaded_tracker.current_project.id)
        assert saved.progress.current_phase == MigrationPhase.DISCOVERY

    def test_no_project(self, tracker):
        tracker.set_current_phase(MigrationPhase.DISCOVERY, force=True)
        assert tracker.current_phase == MigrationPhase.DISCOVERY
        assert tracker.current_project is None


class TestPhaseGates:
    """Gates of the phases after upload."""

    def test_discovery_needs_graph_and_completion(self, tracker_with_project, lineage_graph):
        tracker_with_project.set_current_phase(MigrationPhase.DISCOVERY, force=True)
        assert tracker_with_project.can_proceed_to_next_phase() is False

        tracker_with_project.complete_discovery()
        assert tracker_with_project.can_proceed_to_next_phase() is False

        tracker_with_project.set_lineage_graph(lineage_graph)
        assert tracker_with_project.can_proceed_to_next_phase() is True

    def test_complete_discovery(self, tracker_with_project):
        tracker_with_project.complete_discovery()

        state = tracker_with_project.discovery_state
        assert state.progress == 100
        assert state.is_processing is False
        assert state.completed_at is not None
        assert MigrationPhase.DISCOVERY in tracker_with_project.current_project.progress.completed_phases

    def test_mapping_gate_opens_on_completion(self, tracker_with_project):
        tracker_with_project.set_current_phase(MigrationPhase.MAPPING, force=True)
        assert tracker_with_project.can_proceed_to_next_phase() is False

        tracker_with_project.complete_mapping()
        assert tracker_with_project.can_proceed_to_next_phase() is True
        assert tracker_with_project.current_project.progress.mappings_complete is True

    def test_codegen_gate_stays_closed(self, tracker_with_project):
        tracker_with_project.set_current_phase(MigrationPhase.CODEGEN, force=True)
        tracker_with_project.generate_code(CodePlatform.BIGQUERY)
        assert tracker_with_project.can_proceed_to_next_phase() is False

    def test_codegen_completion_allows_advance(self, tracker_with_project):
        tracker_with_project.set_current_phase(MigrationPhase.CODEGEN, force=True)
        tracker_with_project.complete_code_generation()

        tracker_with_project.set_current_phase(MigrationPhase.VALIDATION)

        progress = tracker_with_project.current_project.progress
        assert tracker_with_project.current_phase == MigrationPhase.VALIDATION
        assert progress.code_generated is True

    def test_validation_gate_follows_flag(self, tracker_with_project):
        tracker_with_project.set_current_phase(MigrationPhase.VALIDATION, force=True)
        assert tracker_with_project.can_proceed_to_next_phase() is False

        tracker_with_project.current_project.progress.validation_complete = True
        assert tracker_with_project.can_proceed_to_next_phase() is True


class TestCodeGeneration:
    """Per-platform generated code slots."""

    def test_regenerate_replaces_slot_with_later_timestamp(self, tracker_with_project):
        first = tracker_with_project.generate_code(CodePlatform.BIGQUERY)
        first_time = first.last_generated
        second = tracker_with_project.generate_code(CodePlatform.BIGQUERY)

        codes = tracker_with_project.code_generation_state.generated_codes
        assert codes[CodePlatform.BIGQUERY] is second
        assert second.last_generated > first_time
        assert codes[CodePlatform.DBT] is None

    def test_same_timestamp_is_bumped(self, tracker):
        stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
        tracker.set_generated_code(
            CodePlatform.DBT, GeneratedCode(CodePlatform.DBT, "a", "a.sql", "sql", stamp)
        )
        tracker.set_generated_code(
            CodePlatform.DBT, GeneratedCode(CodePlatform.DBT, "b", "b.sql", "sql", stamp)
        )

        code = tracker.code_generation_state.generated_codes[CodePlatform.DBT]
        assert code.content == "b"
        assert code.last_generated == stamp + timedelta(microseconds=1)

    def test_wrong_slot_rejected(self, tracker):
        code = GeneratedCode(CodePlatform.DBT, "a", "a.sql", "sql")
        with pytest.raises(ValueError):
            tracker.set_generated_code(CodePlatform.BIGQUERY, code)

    def test_progress_capped(self, tracker):
        for i in range(8):
            tracker.start_code_generation(f"step {i}")
        assert tracker.code_generation_state.progress == 100

    def test_generate_sets_optimizations(self, tracker):
        tracker.generate_code(CodePlatform.DATABRICKS)
        assert len(tracker.code_generation_state.optimizations) == 4


class TestCompletion:
    """Validation sign-off and project completion."""

    def test_incomplete_checklist_refused(self, tracker_with_project):
        with pytest.raises(PhaseTransitionError):
            tracker_with_project.complete_project()
        assert tracker_with_project.current_project.status == ProjectStatus.DRAFT

    def test_complete_project(self, tracker_with_project):
        for item in tracker_with_project.validation_checklist.items:
            if item.required:
                tracker_with_project.set_checklist_item(item.id, True)

        project = tracker_with_project.complete_project()

        assert project.status == ProjectStatus.COMPLETED
        assert project.progress.validation_complete is True
        assert project.progress.schemas_uploaded is True
        assert project.progress.mappings_complete is True
        assert project.progress.code_generated is True
        assert project.progress.completed_phases == list(MigrationPhase)
        assert tracker_with_project.validation_checklist.completed_at is not None
        assert tracker_with_project.catalog.get_project(project.id).status == ProjectStatus.COMPLETED

    def test_no_project(self, tracker):
        assert tracker.complete_project() is None


class TestUserProfile:

    def test_set_and_clear(self, tracker, storage):
        profile = tracker.user_profile
        profile.name = "Sam Lee"
        tracker.set_user_profile(profile)
        assert storage.get(STATE_KEY)["user_profile"]["name"] == "Sam Lee"

        tracker.clear_user_profile()
        assert tracker.user_profile.name == "Alex Chen"
        assert tracker.user_profile.authenticated is False
        assert storage.get(STATE_KEY)["user_profile"]["name"] == "Alex Chen"
