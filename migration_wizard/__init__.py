"""
Migration Wizard

Progress tracking for a five-phase legacy-to-cloud schema migration wizard.

Supports:
- Schema upload with per-file processing status and previews
- Lineage discovery over uploaded schemas
- AI-suggested field mappings with review (approve, reject, bulk approve)
- Code generation for BigQuery, Databricks, Python/Beam and dbt
- Validation sign-off and project completion
- Local persistence of the current project, phase and user profile
"""

__version__ = "0.1.0"
