"""Export of generated code, project README and the field mapping report."""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ..errors import ExportError
from ..models.project import MigrationPhase, Project
from ..models.lineage import LineageGraph
from ..models.mapping import TableMapping
from ..models.codegen import GeneratedCode, PLATFORM_INFO
from ..models.timestamps import utcnow

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    ("Source Field Name", 25),
    ("Source Table Name", 20),
    ("Target Field Name", 25),
    ("Target Table Name", 20),
    ("Confidence Level", 15),
]

PHASE_DESCRIPTIONS = {
    MigrationPhase.UPLOAD: "**Schema Upload**: Source and target schemas analyzed",
    MigrationPhase.DISCOVERY: "**Discovery**: Data lineage and relationships mapped",
    MigrationPhase.MAPPING: "**Field Mapping**: AI-generated field mappings with transformations",
    MigrationPhase.CODEGEN: "**Code Generation**: Platform-specific ETL code generated",
    MigrationPhase.VALIDATION: "**Validation**: Data quality checks and validation scripts",
}


def safe_file_stem(name: str) -> str:
    """Replace anything but letters and digits with underscores."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def write_code_files(codes: Iterable[Optional[GeneratedCode]], output_dir: str,
                     organize_by_platform: bool = False) -> List[Path]:
    """
    Write generated code artifacts to a directory.

    Args:
        codes: Artifacts; empty platform slots (None) are skipped
        output_dir: Destination directory, created if missing
        organize_by_platform: Put each file in a subdirectory named after its platform

    Returns:
        Paths of the written files
    """
    root = Path(output_dir)
    written = []
    try:
        for code in codes:
            if code is None:
                continue
            directory = root / code.platform.value if organize_by_platform else root
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / code.file_name
            path.write_text(code.content, encoding="utf-8")
            written.append(path)
    except OSError as e:
        raise ExportError(f"Failed to write code files to {output_dir}: {e}") from e

    logger.info(f"Wrote {len(written)} code files to {root}")
    return written


def render_readme(project_name: str, codes: Iterable[Optional[GeneratedCode]],
                  organize_by_platform: bool = False) -> str:
    """Render the README shipped alongside exported code."""
    codes = [c for c in codes if c is not None]
    lines = [
        f"# {project_name} - Data Migration",
        "",
        "## Overview",
        "This repository contains generated ETL code for migrating data from legacy "
        "systems to modern cloud platforms.",
        "",
        "## Generated Platforms",
    ]
    for code in codes:
        lines.append(
            f"- **{code.platform.value.upper()}**: {code.file_name} ({round(code.size / 1024)}KB)"
        )

    lines += ["", "## Quick Start", ""]
    for code in codes:
        info = PLATFORM_INFO[code.platform]
        lines += [f"### {info['name']}", info["description"], f"Use case: {info['use_case']}", ""]

    lines += ["## File Structure", "```"]
    for code in codes:
        if organize_by_platform:
            lines += [f"├── {code.platform.value}/", f"│   └── {code.file_name}"]
        else:
            lines.append(f"├── {code.file_name}")
    lines += ["└── README.md", "```", "", "## Migration Process"]
    for i, phase in enumerate(MigrationPhase, 1):
        lines.append(f"{i}. {PHASE_DESCRIPTIONS[phase]}")
    lines.append("")
    return "\n".join(lines)


def write_readme(project_name: str, codes: Iterable[Optional[GeneratedCode]], output_dir: str,
                 organize_by_platform: bool = False) -> Path:
    path = Path(output_dir) / "README.md"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_readme(project_name, codes, organize_by_platform), encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write README to {path}: {e}") from e
    return path


def mapping_report_rows(table_mappings: List[TableMapping],
                        lineage_graph: Optional[LineageGraph] = None) -> List[Dict[str, Any]]:
    """
    Flatten table mappings into report rows.

    Table and column IDs are resolved to names through the lineage graph
    when one is given; unknown IDs are reported as-is.
    """
    table_names: Dict[str, str] = {}
    column_names: Dict[str, str] = {}
    if lineage_graph is not None:
        for table in lineage_graph.tables:
            table_names[table.id] = table.name
            for column in table.columns:
                column_names[column.id] = column.name

    rows = []
    for table_mapping in table_mappings:
        for mapping in table_mapping.field_mappings:
            rows.append({
                "Source Field Name": column_names.get(mapping.source_column_id, mapping.source_column_id),
                "Source Table Name": table_names.get(mapping.source_table_id, mapping.source_table_id),
                "Target Field Name": column_names.get(mapping.target_column_id, mapping.target_column_id),
                "Target Table Name": table_names.get(mapping.target_table_id, mapping.target_table_id),
                "Confidence Level": mapping.confidence,
            })
    return rows


def summarize_report(rows: List[Dict[str, Any]]) -> Dict[str, int]:
    """Total, average confidence and count of rows at or above 90."""
    confidences = [row["Confidence Level"] for row in rows]
    return {
        "total_mappings": len(rows),
        "average_confidence": round(sum(confidences) / len(confidences)) if confidences else 0,
        "high_confidence_mappings": sum(1 for c in confidences if c >= 90),
    }


def build_mapping_workbook(rows: List[Dict[str, Any]]) -> Workbook:
    """Build the single-sheet mapping report workbook."""
    if not rows:
        raise ExportError("No mapping data available to export")

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Mapping Report"
    sheet.append([name for name, _ in REPORT_COLUMNS])
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    for row in rows:
        sheet.append([row[name] for name, _ in REPORT_COLUMNS])
    for i, (_, width) in enumerate(REPORT_COLUMNS, 1):
        sheet.column_dimensions[get_column_letter(i)].width = width
    return workbook


def write_mapping_report(table_mappings: List[TableMapping], output_dir: str,
                         project_name: str = "Migration Project",
                         lineage_graph: Optional[LineageGraph] = None,
                         when: Optional[datetime] = None) -> Path:
    """
    Write the mapping report as an .xlsx file.

    Args:
        table_mappings: Table mappings whose field mappings become rows
        output_dir: Destination directory
        project_name: Used in the file name
        lineage_graph: Optional graph for resolving IDs to names
        when: Date stamped into the file name (default: now)

    Returns:
        Path of the written workbook

    Raises:
        ExportError: If there are no field mappings or the file cannot be written
    """
    rows = mapping_report_rows(table_mappings, lineage_graph)
    workbook = build_mapping_workbook(rows)

    stamp = (when or utcnow()).date().isoformat()
    path = Path(output_dir) / f"{safe_file_stem(project_name)}_Mapping_Report_{stamp}.xlsx"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(path)
    except OSError as e:
        raise ExportError(f"Failed to write mapping report to {path}: {e}") from e

    logger.info(f"Mapping report written: {path} ({len(rows)} rows)")
    return path


def export_project(tracker, output_dir: str, organize_by_platform: bool = False) -> Dict[str, Any]:
    """
    Export everything the tracker has produced for the current project.

    Returns:
        Dict with ``code_files``, ``readme`` and ``mapping_report`` paths;
        ``mapping_report`` is None when there are no field mappings
    """
    project: Optional[Project] = tracker.current_project
    if project is None:
        raise ExportError("No current project to export")

    codes = list(tracker.code_generation_state.generated_codes.values())
    result: Dict[str, Any] = {
        "code_files": write_code_files(codes, output_dir, organize_by_platform),
        "readme": write_readme(project.name, codes, output_dir, organize_by_platform),
        "mapping_report": None,
    }
    if any(m.field_mappings for m in tracker.mapping_state.all_mappings):
        result["mapping_report"] = write_mapping_report(
            tracker.mapping_state.all_mappings,
            output_dir,
            project_name=project.name,
            lineage_graph=tracker.discovery_state.lineage_graph,
        )
    return result
