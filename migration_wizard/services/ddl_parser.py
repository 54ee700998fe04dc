"""Rough DDL summary used to build schema file previews."""

import re
from typing import List, Tuple

from ..errors import SchemaFileError
from ..models.schema_file import SchemaPreview

TABLE_PATTERN = re.compile(r"CREATE\s+TABLE\s+([\w.\"`]+)\s*\(([\s\S]*?)\)\s*(?:;|\Z)", re.IGNORECASE)
COLUMN_PATTERN = re.compile(r"^\s*[\w.\"`]+\s+\w+.*?(?:,|$)", re.IGNORECASE | re.MULTILINE)

# Table-level clauses that look like column lines
CONSTRAINT_KEYWORDS = ("PRIMARY", "FOREIGN", "CONSTRAINT", "UNIQUE", "CHECK", "KEY", "INDEX")


def parse_ddl_tables(content: str) -> List[Tuple[str, int]]:
    """
    Find CREATE TABLE statements and count their column definitions.

    Args:
        content: DDL text

    Returns:
        (table name, column count) pairs in file order
    """
    tables = []
    for match in TABLE_PATTERN.finditer(content):
        name = match.group(1).strip('"`')
        body = match.group(2)
        columns = [
            line for line in COLUMN_PATTERN.findall(body)
            if line.strip().split()[0].upper() not in CONSTRAINT_KEYWORDS
        ]
        tables.append((name, len(columns)))
    return tables


def estimate_complexity(column_count: int) -> str:
    if column_count > 100:
        return "complex"
    if column_count > 30:
        return "moderate"
    return "simple"


def build_preview(content: str) -> SchemaPreview:
    """
    Summarize DDL content as a SchemaPreview.

    Raises:
        SchemaFileError: If no CREATE TABLE statement is found
    """
    tables = parse_ddl_tables(content)
    if not tables:
        raise SchemaFileError("No CREATE TABLE statements found")

    column_count = sum(count for _, count in tables)
    return SchemaPreview(
        table_count=len(tables),
        column_count=column_count,
        sample_tables=[name for name, _ in tables[:5]],
        estimated_complexity=estimate_complexity(column_count),
    )
