"""Tests for code, README and mapping report export."""

from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from migration_wizard.errors import ExportError
from migration_wizard.models.codegen import CodePlatform, GeneratedCode
from migration_wizard.models.mapping import FieldMapping, TableMapping
from migration_wizard.services.export import (
    export_project,
    mapping_report_rows,
    render_readme,
    summarize_report,
    write_code_files,
    write_mapping_report,
)


@pytest.fixture
def codes():
    return [
        GeneratedCode(CodePlatform.BIGQUERY, "SELECT 1;", "bigquery_migration.sql", "sql"),
        None,
        GeneratedCode(CodePlatform.DBT, "select 2", "dbt_migration_models.sql", "sql"),
    ]


@pytest.fixture
def table_mappings():
    return [
        TableMapping("DB2_CUSTOMERS", "customers_denorm", field_mappings=[
            FieldMapping("m1", "DB2_CUSTOMERS", "col-db2-customers-1",
                         "customers_denorm", "col-bq-customers-1", confidence=98),
            FieldMapping("m2", "DB2_CUSTOMERS", "EMAIL",
                         "customers_denorm", "email", confidence=80),
        ]),
    ]


class TestCodeExport:

    def test_write_code_files(self, tmp_path, codes):
        paths = write_code_files(codes, str(tmp_path))

        assert sorted(p.name for p in paths) == ["bigquery_migration.sql", "dbt_migration_models.sql"]
        assert (tmp_path / "bigquery_migration.sql").read_text() == "SELECT 1;"

    def test_organize_by_platform(self, tmp_path, codes):
        write_code_files(codes, str(tmp_path), organize_by_platform=True)
        assert (tmp_path / "dbt" / "dbt_migration_models.sql").exists()

    def test_readme(self, codes):
        readme = render_readme("Claims Move", codes)

        assert readme.startswith("# Claims Move - Data Migration")
        assert "- **BIGQUERY**: bigquery_migration.sql" in readme
        assert "DATABRICKS" not in readme
        assert "5. **Validation**" in readme


class TestMappingReport:

    def test_rows_resolve_names(self, table_mappings, lineage_graph):
        rows = mapping_report_rows(table_mappings, lineage_graph)

        assert rows[0] == {
            "Source Field Name": "CUST_ID",
            "Source Table Name": "DB2_CUSTOMERS",
            "Target Field Name": "customer_id",
            "Target Table Name": "customers_denorm",
            "Confidence Level": 98,
        }
        assert rows[1]["Source Field Name"] == "EMAIL"

    def test_summary(self, table_mappings):
        summary = summarize_report(mapping_report_rows(table_mappings))
        assert summary == {"total_mappings": 2, "average_confidence": 89, "high_confidence_mappings": 1}

    def test_workbook(self, tmp_path, table_mappings):
        when = datetime(2024, 3, 1, tzinfo=timezone.utc)
        path = write_mapping_report(table_mappings, str(tmp_path), project_name="Claims Move", when=when)

        assert path.name == "Claims_Move_Mapping_Report_2024-03-01.xlsx"
        sheet = load_workbook(path).active
        rows = list(sheet.iter_rows(values_only=True))
        assert sheet.title == "Mapping Report"
        assert rows[0] == (
            "Source Field Name", "Source Table Name", "Target Field Name",
            "Target Table Name", "Confidence Level",
        )
        assert rows[2] == ("EMAIL", "DB2_CUSTOMERS", "email", "customers_denorm", 80)

    def test_empty_report(self, tmp_path):
        with pytest.raises(ExportError):
            write_mapping_report([TableMapping("a", "b")], str(tmp_path))


class TestProjectExport:

    def test_export_project(self, tmp_path, tracker_with_project):
        tracker_with_project.load_table_mappings()
        tracker_with_project.generate_code(CodePlatform.BIGQUERY)

        result = export_project(tracker_with_project, str(tmp_path))

        assert [p.name for p in result["code_files"]] == ["bigquery_migration.sql"]
        assert result["readme"].read_text().startswith("# Test Migration")
        assert result["mapping_report"].suffix == ".xlsx"

    def test_no_mappings_no_report(self, tmp_path, tracker_with_project):
        result = export_project(tracker_with_project, str(tmp_path))
        assert result["mapping_report"] is None
        assert result["code_files"] == []

    def test_no_project(self, tmp_path, tracker):
        with pytest.raises(ExportError):
            export_project(tracker, str(tmp_path))
