"""Async workflow runner that drives the tracker through the timed wizard steps."""

import asyncio
import logging
from typing import Iterable, List, Optional, Tuple

from ..config import WizardConfig
from ..errors import SchemaFileError
from ..fixtures import CODEGEN_STEPS, DISCOVERY_STEPS, MAPPING_STEPS, SCHEMA_FILE_STEPS
from ..models.codegen import CodePlatform, GeneratedCode, PLATFORM_INFO
from ..models.schema_file import FileSide, FileStatus, SchemaFile
from .ddl_parser import build_preview
from .notifications import NotificationFeed

logger = logging.getLogger(__name__)


class WorkflowRunner:
    """
    Runs the long-running wizard steps against a tracker.

    Each step list is a sequence of ``(label, seconds)`` pairs; the delays
    are multiplied by ``config.delay_scale`` so tests can run with a scale
    of 0. Runs are not cancellable and are not retried. A failure is recorded
    in the phase's ``error`` field and pushed to the notification feed; it
    does not propagate out of the runner.
    """

    def __init__(self, tracker, config: Optional[WizardConfig] = None,
                 notifications: Optional[NotificationFeed] = None):
        """
        Initialize the runner.

        Args:
            tracker: MigrationTracker to update
            config: Wizard configuration (defaults to the tracker's)
            notifications: Feed for user-facing messages
        """
        self.tracker = tracker
        self.config = config or tracker.config
        self.notifications = notifications or NotificationFeed()

    async def _sleep(self, seconds: float) -> None:
        delay = seconds * self.config.delay_scale
        if delay > 0:
            await asyncio.sleep(delay)

    async def process_file(self, file: SchemaFile, content: str,
                           side: Optional[FileSide] = None) -> SchemaFile:
        """
        Simulate server-side processing of an uploaded schema file.

        Args:
            file: File record, status ``uploading``
            content: Raw DDL text of the file
            side: When given, the file is first added to that side

        Returns:
            The file, now ``completed`` with a preview or ``error``
        """
        if side is not None:
            self.tracker.add_file(file, side)

        for status, seconds in SCHEMA_FILE_STEPS:
            await self._sleep(seconds)
            status = FileStatus(status)
            if status != FileStatus.COMPLETED:
                self.tracker.update_file_status(file.id, status)
                continue
            try:
                preview = build_preview(content)
            except SchemaFileError as e:
                self.tracker.update_file_status(file.id, FileStatus.ERROR, error=str(e))
                self.notifications.error("File processing failed", f"{file.name}: {e}")
                return file
            self.tracker.update_file_status(file.id, FileStatus.COMPLETED, preview=preview)

        self.notifications.success(
            "File processed",
            f"{file.name}: {file.preview.table_count} tables, {file.preview.column_count} columns",
        )
        return file

    def record_read_error(self, file: SchemaFile, side: FileSide, error: str) -> SchemaFile:
        """Track a file whose content could not be read as failed."""
        self.tracker.add_file(file, side)
        self.tracker.update_file_status(file.id, FileStatus.ERROR, error=error)
        self.notifications.error("File read failed", f"{file.name}: {error}")
        logger.warning(f"Could not read {file.name}: {error}")
        return file

    async def upload_files(self, uploads: Iterable[Tuple[SchemaFile, str, FileSide]]) -> List[SchemaFile]:
        """Process several uploads concurrently, tracking overall upload progress."""
        uploads = list(uploads)
        if not uploads:
            return []

        done = 0
        self.tracker.set_upload_progress(0)

        async def _one(file: SchemaFile, content: str, side: FileSide) -> SchemaFile:
            nonlocal done
            result = await self.process_file(file, content, side)
            done += 1
            self.tracker.set_upload_progress(int(done / len(uploads) * 100))
            return result

        return list(await asyncio.gather(*(_one(f, c, s) for f, c, s in uploads)))

    async def run_discovery(self) -> bool:
        """
        Run lineage discovery over the uploaded files.

        Returns:
            True if discovery completed
        """
        tracker = self.tracker
        tracker.start_discovery()
        try:
            for i, (step, seconds) in enumerate(DISCOVERY_STEPS):
                tracker.update_discovery_progress(int((i + 1) / len(DISCOVERY_STEPS) * 100), step)
                await self._sleep(seconds)

            graph = tracker.discover_lineage()
            tracker.complete_discovery()
        except Exception as e:
            tracker.fail_discovery(str(e))
            self.notifications.error("Discovery failed", str(e))
            return False

        stats = graph.statistics
        self.notifications.success(
            "Discovery complete",
            f"Found {stats['total_tables']} tables and {stats['total_relationships']} relationships",
        )
        return True

    async def run_mapping(self) -> bool:
        """
        Generate table mappings and field mapping suggestions.

        The first seeded table pair is selected when none is. Mapping is not
        marked complete here; that happens when the user finishes review.

        Returns:
            True if suggestions were generated
        """
        tracker = self.tracker
        tracker.start_mapping()
        try:
            for i, (step, seconds) in enumerate(MAPPING_STEPS):
                tracker.update_mapping_progress(int((i + 1) / len(MAPPING_STEPS) * 100), step)
                await self._sleep(seconds)

            tracker.load_table_mappings()
            state = tracker.mapping_state
            if state.current_table_mapping is None and state.all_mappings:
                first = state.all_mappings[0]
                tracker.set_selected_tables(first.source_table_id, first.target_table_id)
            suggestions = tracker.generate_ai_suggestions()
        except Exception as e:
            tracker.fail_mapping(str(e))
            self.notifications.error("Mapping failed", str(e))
            return False

        state.is_processing = False
        self.notifications.success(
            "Mapping suggestions ready",
            f"{len(suggestions)} suggestions across {len(state.all_mappings)} table pairs",
        )
        return True

    async def run_code_generation(self, platform: Optional[CodePlatform] = None) -> Optional[GeneratedCode]:
        """
        Generate code for a platform.

        Args:
            platform: Target platform (default: the selected one)

        Returns:
            The generated artifact, or None on failure
        """
        tracker = self.tracker
        if platform is not None:
            tracker.set_selected_platform(platform)
        platform = tracker.code_generation_state.selected_platform
        tracker.code_generation_state.progress = 0

        try:
            for step, seconds in CODEGEN_STEPS:
                tracker.start_code_generation(step)
                await self._sleep(seconds)
            code = tracker.generate_code(platform)
        except Exception as e:
            tracker.fail_code_generation(str(e))
            self.notifications.error("Code generation failed", str(e))
            return None

        self.notifications.success(
            "Code generated",
            f"{PLATFORM_INFO[platform]['name']}: {code.file_name}",
        )
        return code
