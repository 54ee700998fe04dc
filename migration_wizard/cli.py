"""Command-line interface for the migration wizard."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import WizardConfig
from .errors import WizardError
from .models.project import MigrationPhase, SchemaDialect, UserProfile
from .models.schema_file import FileSide, FileStatus, SchemaFile
from .models.mapping import FieldMapping, MappingStatus, TransformationType
from .models.codegen import CodePlatform, PLATFORM_INFO
from .services.storage import JsonFileStorage
from .services.runner import WorkflowRunner
from .services.export import export_project
from .tracker import MigrationTracker

logger = logging.getLogger(__name__)


class InteractiveReviewCLI:
    """
    Interactive review of field mapping suggestions.

    Supports:
    - Listing suggestions with confidence and status
    - Approving, rejecting and reverting single suggestions
    - Bulk approving high-confidence suggestions
    - Adding manual mappings to the selected table pair
    """

    def __init__(self, tracker: MigrationTracker, high_confidence: int = 90):
        """
        Initialize the review CLI.

        Args:
            tracker: Tracker holding generated suggestions
            high_confidence: Confidence at which suggestions are starred
        """
        self.tracker = tracker
        self.high_confidence = high_confidence

    def run(self):
        """Run the review loop until the user is done."""
        print("\n" + "=" * 60)
        print("  Migration Wizard - Mapping Review")
        print("=" * 60)

        while True:
            self._print_menu()
            choice = input("\nEnter choice: ").strip()

            try:
                if choice == "1":
                    self._list_suggestions()
                elif choice == "2":
                    self._change_status("approve", self.tracker.accept_mapping)
                elif choice == "3":
                    self._change_status("reject", self.tracker.reject_mapping)
                elif choice == "4":
                    self._change_status("revert", self.tracker.revert_mapping)
                elif choice == "5":
                    approved = self.tracker.bulk_accept_high_confidence()
                    print(f"Approved {approved} high-confidence suggestions")
                elif choice == "6":
                    self._add_manual_mapping()
                elif choice == "7" or choice.lower() == "q":
                    break
                else:
                    print("\nInvalid choice. Please try again.")
            except WizardError as e:
                print(f"Error: {e}")

    def _print_menu(self):
        print("\n" + "-" * 40)
        print("Options:")
        print("  1. List suggestions")
        print("  2. Approve suggestion")
        print("  3. Reject suggestion")
        print("  4. Revert rejected suggestion")
        print("  5. Approve all high-confidence suggestions")
        print("  6. Add manual mapping")
        print("  7. Done")
        print("-" * 40)

    def _list_suggestions(self):
        suggestions = self.tracker.mapping_state.suggestions
        if not suggestions:
            print("No suggestions. Run mapping first.")
            return

        print(f"\n=== {len(suggestions)} Suggestions ===")
        for s in suggestions:
            star = "*" if s.confidence >= self.high_confidence else " "
            print(
                f"  {star} {s.id}: {s.source_table_id}.{s.source_column_id} -> "
                f"{s.target_table_id}.{s.target_column_id} "
                f"({s.transformation_type.value}, {s.confidence}%) [{s.status.value}]"
            )

    def _change_status(self, verb: str, action):
        mapping_id = input(f"Mapping ID to {verb}: ").strip()
        mapping = action(mapping_id)
        print(f"{mapping.id}: {mapping.status.value}")

    def _add_manual_mapping(self):
        current = self.tracker.mapping_state.current_table_mapping
        if current is None:
            print("No table pair selected")
            return

        source_column = input(f"Source column ({current.source_table_id}): ").strip()
        target_column = input(f"Target column ({current.target_table_id}): ").strip()
        transform_input = input("Transformation (default: direct): ").strip()
        try:
            transform = TransformationType(transform_input) if transform_input else TransformationType.DIRECT
        except ValueError:
            transform = TransformationType.DIRECT
        formula = input("Formula (optional): ").strip() or None

        mapping = FieldMapping(
            id=f"manual-{len(current.field_mappings) + 1}",
            source_table_id=current.source_table_id,
            source_column_id=source_column,
            target_table_id=current.target_table_id,
            target_column_id=target_column,
            transformation_type=transform,
            confidence=100,
            formula=formula,
        )
        self.tracker.add_field_mapping(mapping)
        print(f"Added: {source_column} -> {target_column}")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Migration Wizard - Track a schema migration from upload to validation"
    )
    parser.add_argument("--state-file", help="Path to the JSON state file")
    parser.add_argument("--delay-scale", type=float, help="Multiplier for simulated step durations")
    parser.add_argument("--no-gating", action="store_true", help="Accept any phase change")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Status
    subparsers.add_parser("status", help="Show the current project and phase")

    # Catalog
    projects_parser = subparsers.add_parser("projects", help="List projects")
    projects_parser.add_argument("--templates", action="store_true", help="List templates instead")

    new_parser = subparsers.add_parser("new", help="Create a project and make it current")
    new_parser.add_argument("name", help="Project name")
    new_parser.add_argument("--template", help="Template ID or name")
    new_parser.add_argument("--source", choices=[d.value for d in SchemaDialect], help="Source dialect")
    new_parser.add_argument("--target", choices=[d.value for d in SchemaDialect], help="Target dialect")
    new_parser.add_argument("--description", default="", help="Project description")

    select_parser = subparsers.add_parser("select", help="Make a catalog project current")
    select_parser.add_argument("project_id", help="Project ID")

    # Phases
    upload_parser = subparsers.add_parser("upload", help="Upload source and target schema files")
    upload_parser.add_argument("--source", nargs="+", required=True, help="Source DDL files")
    upload_parser.add_argument("--target", nargs="+", required=True, help="Target DDL files")
    upload_parser.add_argument("--stay", action="store_true", help="Do not move to the next phase")

    discover_parser = subparsers.add_parser("discover", help="Run lineage discovery")
    discover_parser.add_argument("--stay", action="store_true", help="Do not move to the next phase")

    map_parser = subparsers.add_parser("map", help="Generate and review field mappings")
    map_parser.add_argument("--bulk-accept", action="store_true", help="Approve high-confidence suggestions")
    map_parser.add_argument("--interactive", "-i", action="store_true", help="Review suggestions interactively")
    map_parser.add_argument("--stay", action="store_true", help="Do not move to the next phase")

    generate_parser = subparsers.add_parser("generate", help="Generate migration code")
    generate_parser.add_argument(
        "--platform", nargs="+", choices=[p.value for p in CodePlatform],
        default=[CodePlatform.BIGQUERY.value], help="Target platforms",
    )
    generate_parser.add_argument("--export", dest="output", help="Export the generated files to a directory")
    generate_parser.add_argument("--stay", action="store_true", help="Do not move to the next phase")

    advance_parser = subparsers.add_parser("advance", help="Move to another phase")
    advance_parser.add_argument("--to", choices=[p.value for p in MigrationPhase], help="Phase (default: next)")
    advance_parser.add_argument("--force", action="store_true", help="Skip gating")

    complete_parser = subparsers.add_parser("complete", help="Sign off and complete the project")
    complete_parser.add_argument("--check", nargs="*", default=[], help="Checklist item IDs to check")
    complete_parser.add_argument("--all", action="store_true", help="Check every checklist item")

    export_parser = subparsers.add_parser("export", help="Export code, README and mapping report")
    export_parser.add_argument("--output", help="Output directory")
    export_parser.add_argument("--by-platform", action="store_true", help="One subdirectory per platform")

    profile_parser = subparsers.add_parser("profile", help="Show or set the user profile")
    profile_parser.add_argument("--name", help="Display name")
    profile_parser.add_argument("--email", help="Email address")
    profile_parser.add_argument("--sign-out", action="store_true", help="Reset to the default profile")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if args.command is None:
        parser.print_help()
        return 0

    config = _build_config(args)
    if args.command == "serve":
        return run_server(args, config)

    tracker = MigrationTracker.load(JsonFileStorage(config.state_file), config)
    commands = {
        "status": show_status,
        "projects": list_projects,
        "new": create_project,
        "select": select_project,
        "upload": run_upload,
        "discover": run_discovery,
        "map": run_mapping,
        "generate": run_generation,
        "advance": advance_phase,
        "complete": complete_project,
        "export": run_export,
        "profile": manage_profile,
    }
    try:
        commands[args.command](args, tracker)
    except WizardError as e:
        print(f"Error: {e}")
        return 1
    return 0


def _build_config(args) -> WizardConfig:
    config = WizardConfig.from_env()
    if args.state_file:
        config.state_file = args.state_file
    if args.delay_scale is not None:
        config.delay_scale = args.delay_scale
    if args.no_gating:
        config.enforce_gating = False
    return config


def _advance(tracker: MigrationTracker, args):
    if getattr(args, "stay", False):
        return
    target = tracker.current_phase.next()
    if target is not None:
        tracker.set_current_phase(target)
        print(f"Moved to phase: {target.value}")


def show_status(args, tracker: MigrationTracker):
    """Print the current project and phase."""
    project = tracker.current_project
    print("\n" + "=" * 60)
    print("MIGRATION STATUS")
    print("=" * 60)
    if project is None:
        print("No current project. Create one with 'new' or pick one with 'select'.")
        return
    progress = project.progress
    print(f"Project: {project.name} ({project.id})")
    print(f"Dialects: {project.source_dialect.display_name} -> {project.target_dialect.display_name}")
    print(f"Status: {project.status.value}")
    print(f"Phase: {tracker.current_phase.value}")
    print(f"Completed: {', '.join(p.value for p in progress.completed_phases) or '-'}")
    print(f"Progress: {progress.percent_complete:.0f}%")
    print(f"User: {tracker.user_profile.name}")


def list_projects(args, tracker: MigrationTracker):
    if args.templates:
        for template in tracker.catalog.list_templates():
            print(f"{template.id}: {template.name} [{template.complexity}, {template.estimated_duration}]")
            print(f"   {template.description}")
        return

    current_id = tracker.current_project.id if tracker.current_project else None
    for project in tracker.catalog.list_projects():
        marker = "*" if project.id == current_id else " "
        print(
            f"{marker} {project.id}: {project.name} "
            f"({project.status.value}, {project.progress.current_phase.value})"
        )


def create_project(args, tracker: MigrationTracker):
    try:
        project = tracker.catalog.create_project(
            args.name,
            template=args.template,
            source_dialect=args.source,
            target_dialect=args.target,
            description=args.description,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return
    tracker.set_current_project(project)
    print(f"Created project {project.id}: {project.name}")


def select_project(args, tracker: MigrationTracker):
    project = tracker.catalog.get_project(args.project_id)
    tracker.set_current_project(project)
    print(f"Current project: {project.name} (phase: {tracker.current_phase.value})")


def _schema_files(paths: List[str], side: FileSide, dialect: SchemaDialect):
    """Read schema files; unreadable ones come back separately with the reason."""
    uploads, failures = [], []
    for path in paths:
        file = SchemaFile(name=Path(path).name, dialect=dialect)
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            failures.append((file, side, f"Failed to read file: {e}"))
            continue
        file.size = len(content.encode("utf-8"))
        uploads.append((file, content, side))
    return uploads, failures


def run_upload(args, tracker: MigrationTracker):
    """Process the given schema files and move on when all succeed."""
    project = tracker.current_project
    if project is None:
        print("No current project")
        return

    source_uploads, source_failures = _schema_files(args.source, FileSide.SOURCE, project.source_dialect)
    target_uploads, target_failures = _schema_files(args.target, FileSide.TARGET, project.target_dialect)

    runner = WorkflowRunner(tracker)
    files = [runner.record_read_error(*failure) for failure in source_failures + target_failures]
    files += asyncio.run(runner.upload_files(source_uploads + target_uploads))

    for file in files:
        if file.status == FileStatus.COMPLETED:
            preview = file.preview
            print(
                f"  {file.name}: {preview.table_count} tables, {preview.column_count} columns "
                f"({preview.estimated_complexity})"
            )
        else:
            print(f"  {file.name}: {file.status.value} - {file.error}")

    if tracker.can_proceed_to_next_phase():
        _advance(tracker, args)
    else:
        print("Some files failed; fix them and upload again.")


def run_discovery(args, tracker: MigrationTracker):
    runner = WorkflowRunner(tracker)
    if not asyncio.run(runner.run_discovery()):
        print(f"Discovery failed: {tracker.discovery_state.error}")
        return

    stats = tracker.discovery_state.lineage_graph.statistics
    print(f"Tables: {stats['total_tables']}")
    print(f"Columns: {stats['total_columns']}")
    print(f"Relationships: {stats['total_relationships']}")
    print(f"Complexity: {stats['complexity_score']}")
    _advance(tracker, args)


def run_mapping(args, tracker: MigrationTracker):
    runner = WorkflowRunner(tracker)
    if not asyncio.run(runner.run_mapping()):
        print(f"Mapping failed: {tracker.mapping_state.error}")
        return

    if args.bulk_accept:
        approved = tracker.bulk_accept_high_confidence()
        print(f"Approved {approved} high-confidence suggestions")
    if args.interactive:
        InteractiveReviewCLI(tracker, tracker.config.high_confidence).run()

    suggestions = tracker.mapping_state.suggestions
    for status in MappingStatus:
        count = sum(1 for s in suggestions if s.status == status)
        if count:
            print(f"  {status.value}: {count}")

    tracker.complete_mapping()
    _advance(tracker, args)


def _generate(tracker: MigrationTracker, platforms: List[str]) -> bool:
    runner = WorkflowRunner(tracker)
    for platform in platforms:
        code = asyncio.run(runner.run_code_generation(CodePlatform(platform)))
        if code is None:
            print(f"Code generation failed: {tracker.code_generation_state.error}")
            return False
        print(f"  {PLATFORM_INFO[code.platform]['name']}: {code.file_name} ({code.size} chars)")
    return True


def run_generation(args, tracker: MigrationTracker):
    if not tracker.mapping_state.all_mappings:
        tracker.load_table_mappings()
    if not _generate(tracker, args.platform):
        return

    tracker.complete_code_generation()
    if args.output:
        result = export_project(tracker, args.output)
        print(f"Exported {len(result['code_files'])} files to {args.output}")
    _advance(tracker, args)


def advance_phase(args, tracker: MigrationTracker):
    target = MigrationPhase(args.to) if args.to else tracker.current_phase.next()
    if target is None:
        print("Already at the last phase")
        return
    tracker.set_current_phase(target, force=args.force)
    print(f"Moved to phase: {target.value}")


def complete_project(args, tracker: MigrationTracker):
    checklist = tracker.validation_checklist
    for item in checklist.items:
        if args.all or item.id in args.check:
            item.completed = True
    for item_id in args.check:
        if checklist.get_item(item_id) is None:
            print(f"Unknown checklist item: {item_id}")

    if not checklist.is_satisfied:
        print("Checklist incomplete. Missing:")
        for item_id in checklist.missing_required:
            print(f"  - {checklist.get_item(item_id).label} ({item_id})")
        return

    project = tracker.complete_project()
    if project:
        print(f"Project {project.name} completed")


def run_export(args, tracker: MigrationTracker):
    """Regenerate mappings and code for every platform, then export them."""
    # Only the project, phase and profile are persisted between runs
    tracker.load_table_mappings()
    if not _generate(tracker, [p.value for p in CodePlatform]):
        return

    output = args.output or tracker.config.export_dir
    result = export_project(tracker, output, organize_by_platform=args.by_platform)
    print(f"Code files: {len(result['code_files'])}")
    print(f"README: {result['readme']}")
    if result["mapping_report"]:
        print(f"Mapping report: {result['mapping_report']}")


def manage_profile(args, tracker: MigrationTracker):
    if args.sign_out:
        tracker.clear_user_profile()
    elif args.name or args.email:
        profile = UserProfile.from_dict(tracker.user_profile.to_dict())
        profile.name = args.name or profile.name
        profile.email = args.email or profile.email
        profile.authenticated = True
        tracker.set_user_profile(profile)
    print(json.dumps(tracker.user_profile.to_dict(), indent=2))


def run_server(args, config: WizardConfig):
    """Serve the API with uvicorn."""
    import uvicorn
    from .api.main import create_app

    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
