"""Tests for persisted state and the initial-state policy."""

import json

import pytest

from migration_wizard.config import WizardConfig
from migration_wizard.models.project import MigrationPhase, ProjectStatus, UserProfile
from migration_wizard.services.storage import JsonFileStorage, MemoryStorage, STATE_KEY
from migration_wizard.tracker import MigrationTracker


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state" / "wizard_state.json"


class TestRoundTrip:

    def test_reload_restores_project_phase_and_profile(self, state_file, config, uploaded_tracker):
        storage = JsonFileStorage(str(state_file))
        tracker = MigrationTracker(storage, config)
        tracker.set_current_project(uploaded_tracker.current_project)
        tracker.source_files = uploaded_tracker.source_files
        tracker.target_files = uploaded_tracker.target_files
        tracker.set_current_phase(MigrationPhase.DISCOVERY)
        tracker.set_user_profile(UserProfile(id="u1", name="Sam Lee", authenticated=True))

        reloaded = MigrationTracker.load(JsonFileStorage(str(state_file)), config)

        assert reloaded.current_project.to_dict() == tracker.current_project.to_dict()
        assert reloaded.current_phase == MigrationPhase.DISCOVERY
        assert reloaded.user_profile.name == "Sam Lee"
        assert reloaded.user_profile.authenticated is True

    def test_only_three_keys_persisted(self, tracker_with_project, storage):
        tracker_with_project.generate_ai_suggestions()
        tracker_with_project.set_current_phase(MigrationPhase.DISCOVERY, force=True)

        assert set(storage.get(STATE_KEY)) == {"current_project", "current_phase", "user_profile"}

    def test_file_is_json(self, state_file, tracker_with_project):
        storage = JsonFileStorage(str(state_file))
        storage.set(STATE_KEY, tracker_with_project.snapshot())

        data = json.loads(state_file.read_text())
        assert data[STATE_KEY]["current_phase"] == "upload"
        assert data[STATE_KEY]["current_project"]["name"] == "Test Migration"

    def test_unreadable_file_ignored(self, state_file, config):
        state_file.parent.mkdir(parents=True)
        state_file.write_text("{not json")

        tracker = MigrationTracker.load(JsonFileStorage(str(state_file)), config)
        assert tracker.current_project is None
        assert tracker.current_phase == MigrationPhase.UPLOAD


class TestInitialState:

    def test_default_project_from_template(self):
        config = WizardConfig(default_template="DB2 to BigQuery Enterprise")
        tracker = MigrationTracker.load(MemoryStorage(), config)

        project = tracker.current_project
        assert project.name == "DB2 to BigQuery Enterprise"
        assert project.status == ProjectStatus.COMPLETED
        assert project.progress.completed_phases == list(MigrationPhase)
        assert project.progress.validation_complete is True
        assert tracker.current_phase == MigrationPhase.VALIDATION

    def test_no_default_template(self, config):
        tracker = MigrationTracker.load(MemoryStorage(), config)
        assert tracker.current_project is None
        assert tracker.current_phase == MigrationPhase.UPLOAD

    def test_unknown_default_template(self):
        config = WizardConfig(default_template="No Such Template")
        tracker = MigrationTracker.load(MemoryStorage(), config)
        assert tracker.current_project is None

    def test_persisted_project_wins(self, tracker_with_project, storage):
        config = WizardConfig(default_template="DB2 to BigQuery Enterprise")
        tracker = MigrationTracker.load(storage, config)
        assert tracker.current_project.name == "Test Migration"

    def test_persisted_null_project_gets_default(self, tracker, storage):
        tracker.set_current_project(None)
        config = WizardConfig(default_template="template-2")

        reloaded = MigrationTracker.load(storage, config)
        assert reloaded.current_project.id == "proj-template-2"


class TestConfig:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WIZARD_DELAY_SCALE", "0.5")
        monkeypatch.setenv("WIZARD_ENFORCE_GATING", "false")
        monkeypatch.setenv("WIZARD_DEFAULT_TEMPLATE", "")
        monkeypatch.setenv("WIZARD_STATE_FILE", "/tmp/state.json")

        config = WizardConfig.from_env()
        assert config.delay_scale == 0.5
        assert config.enforce_gating is False
        assert config.default_template is None
        assert config.state_file == "/tmp/state.json"

    def test_dict_round_trip(self, config):
        assert WizardConfig.from_dict(config.to_dict()) == config
