"""Canned projects and project templates."""

from ..models.project import ProjectTemplate, SchemaDialect


BASE_PROJECTS = [
    {
        "id": "proj-1",
        "name": "Legacy DB2 to BigQuery Migration",
        "description": "Migrating customer and order data from IBM DB2 to Google BigQuery",
        "source_dialect": "db2",
        "target_dialect": "bigquery",
        "status": "in-progress",
        "created_at": "2024-01-15T10:00:00Z",
        "updated_at": "2024-01-20T14:30:00Z",
        "progress": {
            "current_phase": "mapping",
            "completed_phases": ["upload", "discovery"],
            "schemas_uploaded": True,
        },
    },
    {
        "id": "proj-2",
        "name": "COBOL Copybooks to Snowflake",
        "description": "Modernizing financial data structures from COBOL to Snowflake",
        "source_dialect": "cobol",
        "target_dialect": "snowflake",
        "status": "completed",
        "created_at": "2024-01-10T09:00:00Z",
        "updated_at": "2024-01-25T16:45:00Z",
        "progress": {
            "current_phase": "validation",
            "completed_phases": ["upload", "discovery", "mapping", "codegen", "validation"],
            "schemas_uploaded": True,
            "mappings_complete": True,
            "code_generated": True,
            "validation_complete": True,
        },
    },
    {
        "id": "proj-3",
        "name": "PostgreSQL to BigQuery Analytics",
        "description": "Moving analytics workload from PostgreSQL to BigQuery",
        "source_dialect": "postgres",
        "target_dialect": "bigquery",
        "status": "draft",
        "created_at": "2024-01-22T11:15:00Z",
        "updated_at": "2024-01-22T11:15:00Z",
        "progress": {"current_phase": "upload", "completed_phases": []},
    },
]


PROJECT_TEMPLATES = [
    ProjectTemplate(
        id="template-1",
        name="DB2 to BigQuery Enterprise",
        description="Standard migration pattern for IBM DB2 mainframe data to Google BigQuery",
        source_dialect=SchemaDialect.DB2,
        target_dialect=SchemaDialect.BIGQUERY,
        estimated_duration="4-6 weeks",
        complexity="intermediate",
        tags=["mainframe", "analytics", "cloud"],
    ),
    ProjectTemplate(
        id="template-2",
        name="COBOL to Snowflake Financial",
        description="Specialized template for financial COBOL copybook migrations to Snowflake",
        source_dialect=SchemaDialect.COBOL,
        target_dialect=SchemaDialect.SNOWFLAKE,
        estimated_duration="6-8 weeks",
        complexity="advanced",
        tags=["financial", "legacy", "compliance"],
    ),
    ProjectTemplate(
        id="template-3",
        name="PostgreSQL to BigQuery Analytics",
        description="Quick migration for PostgreSQL databases to BigQuery for analytics",
        source_dialect=SchemaDialect.POSTGRES,
        target_dialect=SchemaDialect.BIGQUERY,
        estimated_duration="2-3 weeks",
        complexity="beginner",
        tags=["analytics", "modern", "quick-start"],
    ),
    ProjectTemplate(
        id="template-4",
        name="Custom JSON to Snowflake",
        description="Flexible template for custom JSON schema migrations to Snowflake",
        source_dialect=SchemaDialect.CUSTOM_JSON,
        target_dialect=SchemaDialect.SNOWFLAKE,
        estimated_duration="3-4 weeks",
        complexity="intermediate",
        tags=["flexible", "json", "modern"],
    ),
]
