"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from migration_wizard.api.main import create_app
from migration_wizard.config import WizardConfig
from migration_wizard.models.project import Project, SchemaDialect
from migration_wizard.models.schema_file import FileStatus, SchemaFile
from migration_wizard.models.lineage import LineageGraph
from migration_wizard.fixtures import LINEAGE_GRAPH
from migration_wizard.services.storage import MemoryStorage
from migration_wizard.tracker import MigrationTracker


SOURCE_DDL = """
CREATE TABLE CUSTOMERS (
    CUST_ID VARCHAR(36) NOT NULL,
    NAME_JSON CLOB,
    REGION_CODE CHAR(2),
    RISK_SCORE DECIMAL(5,2),
    PRIMARY KEY (CUST_ID)
);

CREATE TABLE POLICIES (
    POLICY_ID VARCHAR(36) NOT NULL,
    CUST_ID VARCHAR(36),
    PREMIUM DECIMAL(10,2)
);
"""

TARGET_DDL = """
CREATE TABLE customers_denorm (
    customer_key STRING,
    name_first STRING,
    name_last STRING
);
"""


@pytest.fixture
def config() -> WizardConfig:
    """Config with no simulated delays and no default project."""
    return WizardConfig(delay_scale=0, default_template=None, export_dir="unused")


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def tracker(storage, config) -> MigrationTracker:
    return MigrationTracker(storage, config)


@pytest.fixture
def project() -> Project:
    return Project(
        name="Test Migration",
        source_dialect=SchemaDialect.DB2,
        target_dialect=SchemaDialect.BIGQUERY,
    )


@pytest.fixture
def tracker_with_project(tracker, project) -> MigrationTracker:
    tracker.set_current_project(project)
    return tracker


def completed_file(name: str, dialect: SchemaDialect) -> SchemaFile:
    return SchemaFile(name=name, dialect=dialect, status=FileStatus.COMPLETED)


@pytest.fixture
def uploaded_tracker(tracker_with_project) -> MigrationTracker:
    """Tracker at the upload phase with one completed file per side."""
    tracker_with_project.add_source_file(completed_file("source.sql", SchemaDialect.DB2))
    tracker_with_project.add_target_file(completed_file("target.sql", SchemaDialect.BIGQUERY))
    return tracker_with_project


@pytest.fixture
def lineage_graph() -> LineageGraph:
    return LineageGraph.from_dict(LINEAGE_GRAPH)


@pytest.fixture
def test_client(config, storage) -> TestClient:
    """Create FastAPI test client over in-memory storage."""
    return TestClient(create_app(config, storage))


@pytest.fixture
def make_completed_file():
    return completed_file
