"""Migration progress tracker - single source of truth for a wizard session."""

import copy
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from .config import WizardConfig
from .errors import MappingTransitionError, NotFoundError, PhaseTransitionError
from .models.project import (
    MigrationPhase,
    Project,
    ProjectStatus,
    UserProfile,
)
from .models.schema_file import FileSide, FileStatus, SchemaFile, SchemaPreview
from .models.lineage import DiscoveryState, LineageGraph
from .models.mapping import (
    FieldMapping,
    MappingState,
    MappingStatus,
    TableMapping,
    HIGH_CONFIDENCE_THRESHOLD,
)
from .models.codegen import CodeGenerationState, CodePlatform, GeneratedCode
from .models.validation import ValidationChecklist
from .models.timestamps import utcnow
from .services.catalog import ProjectCatalog, build_default_project
from .services.providers import (
    CodeProvider,
    LineageProvider,
    SuggestionProvider,
    FixtureCodeProvider,
    FixtureLineageProvider,
    FixtureSuggestionProvider,
)
from .services.storage import STATE_KEY

logger = logging.getLogger(__name__)


class MigrationTracker:
    """
    Tracks which phase the current project is in and what each phase produced.

    Handles:
    - Holding the current project and its phase-completion record
    - Gating forward navigation between wizard phases
    - Merging phase results (lineage graph, field mappings, generated code)
    - Writing the current project, phase and user profile to storage

    A tracker is constructed explicitly and passed to whatever drives the
    wizard (CLI, API, runner); there is no module-level instance.
    """

    def __init__(
        self,
        storage,
        config: Optional[WizardConfig] = None,
        catalog: Optional[ProjectCatalog] = None,
        suggestion_provider: Optional[SuggestionProvider] = None,
        lineage_provider: Optional[LineageProvider] = None,
        code_provider: Optional[CodeProvider] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize an empty tracker with no current project.

        Args:
            storage: Storage exposing get/set for the persisted record
            config: Wizard configuration
            catalog: Project catalog (defaults to one over the same storage)
            suggestion_provider: Source of field mapping suggestions
            lineage_provider: Source of lineage graphs
            code_provider: Source of generated code
            clock: Callable returning the current time
        """
        self.storage = storage
        self.config = config or WizardConfig()
        self.catalog = catalog or ProjectCatalog(storage)
        self.suggestion_provider = suggestion_provider or FixtureSuggestionProvider()
        self.lineage_provider = lineage_provider or FixtureLineageProvider()
        self.code_provider = code_provider or FixtureCodeProvider()
        self._clock = clock or utcnow

        self.current_project: Optional[Project] = None
        self.current_phase: MigrationPhase = MigrationPhase.UPLOAD
        self.user_profile = UserProfile()

        self.source_files: List[SchemaFile] = []
        self.target_files: List[SchemaFile] = []
        self.upload_progress = 0

        self.discovery_state = DiscoveryState()
        self.mapping_state = MappingState()
        self.code_generation_state = CodeGenerationState()
        self.validation_checklist = ValidationChecklist()

    @classmethod
    def load(cls, storage, config: Optional[WizardConfig] = None, **kwargs) -> "MigrationTracker":
        """
        Create a tracker from persisted state.

        Storage is read once. When it holds no current project, the initial
        state policy applies: the default template named in the config is
        turned into a finished demo project, or the tracker starts empty when
        no default template is configured.
        """
        tracker = cls(storage, config, **kwargs)
        state = storage.get(STATE_KEY) or {}

        project_data = state.get("current_project")
        if project_data:
            tracker.current_project = Project.from_dict(project_data)
        tracker.current_phase = MigrationPhase(state.get("current_phase", "upload"))
        if state.get("user_profile"):
            tracker.user_profile = UserProfile.from_dict(state["user_profile"])

        if tracker.current_project is None:
            tracker._apply_initial_state()

        logger.info(
            f"Loaded tracker: project={tracker.current_project.id if tracker.current_project else None} "
            f"phase={tracker.current_phase.value}"
        )
        return tracker

    def _apply_initial_state(self) -> None:
        template_name = self.config.default_template
        if not template_name:
            self.current_phase = MigrationPhase.UPLOAD
            return
        try:
            template = self.catalog.get_template(template_name)
        except NotFoundError:
            logger.warning(f"Default template not found: {template_name}; starting empty")
            return
        self.current_project = build_default_project(template)
        self.current_phase = self.current_project.progress.current_phase

    def _now(self) -> datetime:
        return self._clock()

    def snapshot(self) -> Dict[str, Any]:
        """The record written to storage."""
        return {
            "current_project": self.current_project.to_dict() if self.current_project else None,
            "current_phase": self.current_phase.value,
            "user_profile": self.user_profile.to_dict(),
        }

    def _persist(self) -> None:
        self.storage.set(STATE_KEY, self.snapshot())

    def _save_project(self) -> None:
        if self.current_project:
            self.current_project.touch(self._now())
            self.catalog.save_project(self.current_project)
        self._persist()

    # ------------------------------------------------------------------
    # Project and phase
    # ------------------------------------------------------------------

    def set_current_project(self, project: Optional[Project]) -> None:
        """Replace the active project and jump to its persisted phase."""
        self.current_project = project
        self.current_phase = project.progress.current_phase if project else MigrationPhase.UPLOAD
        self._persist()
        logger.info(f"Current project: {project.id if project else None}")

    def set_current_phase(self, phase: MigrationPhase, force: bool = False) -> None:
        """
        Move the wizard to a phase.

        Args:
            phase: Phase to move to
            force: Skip the gating rules (internal navigation)

        Raises:
            PhaseTransitionError: If gating is enforced and the move is refused
        """
        phase = MigrationPhase(phase)
        project = self.current_project

        if self.current_phase == phase:
            return

        if self.config.enforce_gating and not force:
            self._check_transition(phase)

        if project:
            project.progress.mark_completed(project.progress.current_phase)
            if project.status == ProjectStatus.DRAFT and phase != MigrationPhase.UPLOAD:
                project.status = ProjectStatus.IN_PROGRESS
            project.progress.current_phase = phase

        logger.info(f"Phase {self.current_phase.value} -> {phase.value}")
        self.current_phase = phase
        self._save_project()

    def _check_transition(self, phase: MigrationPhase) -> None:
        current = self.current_phase
        if phase.index <= current.index:
            return
        if phase != current.next():
            raise PhaseTransitionError(
                f"Cannot skip from {current.value} to {phase.value}"
            )
        completed = self.current_project.progress.completed_phases if self.current_project else []
        if not (self.can_proceed_to_next_phase() or current in completed):
            raise PhaseTransitionError(
                f"Phase {current.value} is not complete; cannot move to {phase.value}"
            )

    def can_proceed_to_next_phase(self) -> bool:
        """Whether the gate of the current phase is open."""
        phase = self.current_phase

        if phase == MigrationPhase.UPLOAD:
            return self._uploads_ready()

        if phase == MigrationPhase.DISCOVERY:
            state = self.discovery_state
            return state.completed_at is not None and state.lineage_graph is not None

        if phase == MigrationPhase.MAPPING:
            state = self.mapping_state
            logger.debug(
                f"Mapping gate: suggestions={len(state.suggestions)} "
                f"processed={sum(1 for s in state.suggestions if s.is_processed)} "
                f"mappings={len(state.all_mappings)} completed_at={state.completed_at}"
            )
            return (
                len(state.all_mappings) > 0
                or state.all_suggestions_processed
                or state.completed_at is not None
            )

        if phase == MigrationPhase.VALIDATION:
            return bool(self.current_project and self.current_project.progress.validation_complete)

        return False

    def _uploads_ready(self) -> bool:
        return (
            len(self.source_files) > 0
            and len(self.target_files) > 0
            and all(f.is_completed for f in self.source_files)
            and all(f.is_completed for f in self.target_files)
        )

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def add_source_file(self, file: SchemaFile) -> None:
        self.source_files.append(file)

    def add_target_file(self, file: SchemaFile) -> None:
        self.target_files.append(file)

    def add_file(self, file: SchemaFile, side: FileSide) -> None:
        if FileSide(side) == FileSide.SOURCE:
            self.add_source_file(file)
        else:
            self.add_target_file(file)

    def get_file(self, file_id: str) -> SchemaFile:
        for file in self.source_files + self.target_files:
            if file.id == file_id:
                return file
        raise NotFoundError(f"File not found: {file_id}")

    def update_file_status(
        self,
        file_id: str,
        status: FileStatus,
        preview: Optional[SchemaPreview] = None,
        error: Optional[str] = None,
    ) -> SchemaFile:
        """
        Set a file's processing status, preview and error.

        Raises:
            NotFoundError: If no uploaded file has the ID
        """
        file = self.get_file(file_id)
        file.status = FileStatus(status)
        file.preview = preview
        file.error = error

        if self.current_project and self._uploads_ready():
            self.current_project.progress.schemas_uploaded = True
        return file

    def remove_file(self, file_id: str, side: FileSide) -> None:
        if FileSide(side) == FileSide.SOURCE:
            self.source_files = [f for f in self.source_files if f.id != file_id]
        else:
            self.target_files = [f for f in self.target_files if f.id != file_id]

    def clear_files(self) -> None:
        self.source_files = []
        self.target_files = []
        self.upload_progress = 0

    def set_upload_progress(self, progress: int) -> None:
        self.upload_progress = progress

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def start_discovery(self) -> None:
        state = self.discovery_state
        state.is_processing = True
        state.progress = 0
        state.current_step = "Analyzing schema files..."
        state.error = None

    def update_discovery_progress(self, progress: int, step: str) -> None:
        self.discovery_state.progress = progress
        self.discovery_state.current_step = step

    def set_lineage_graph(self, graph: LineageGraph) -> None:
        self.discovery_state.lineage_graph = graph

    def discover_lineage(self) -> LineageGraph:
        """Ask the lineage provider for a graph over the uploaded files and store it."""
        graph = self.lineage_provider.discover(self.source_files, self.target_files)
        self.set_lineage_graph(graph)
        return graph

    def fail_discovery(self, error: str) -> None:
        self.discovery_state.is_processing = False
        self.discovery_state.error = error
        logger.error(f"Discovery failed: {error}")

    def complete_discovery(self) -> None:
        """Stamp discovery as complete and record the phase."""
        state = self.discovery_state
        state.is_processing = False
        state.progress = 100
        state.current_step = "Discovery complete"
        state.completed_at = self._now()
        if self.current_project:
            self.current_project.progress.mark_completed(MigrationPhase.DISCOVERY)
        self._save_project()

    def reset_discovery(self) -> None:
        self.discovery_state = DiscoveryState()

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def start_mapping(self) -> None:
        state = self.mapping_state
        state.is_processing = True
        state.progress = 0
        state.current_step = "Initializing mapping analysis..."
        state.error = None

    def update_mapping_progress(self, progress: int, step: str) -> None:
        self.mapping_state.progress = progress
        self.mapping_state.current_step = step

    def fail_mapping(self, error: str) -> None:
        self.mapping_state.is_processing = False
        self.mapping_state.error = error
        logger.error(f"Mapping failed: {error}")

    def set_selected_tables(self, source_table_id: str, target_table_id: str) -> TableMapping:
        """Select a table pair, reusing its existing mapping if there is one."""
        state = self.mapping_state
        state.selected_source_table = source_table_id
        state.selected_target_table = target_table_id
        state.current_table_mapping = (
            state.find_table_mapping(source_table_id, target_table_id)
            or TableMapping(source_table_id=source_table_id, target_table_id=target_table_id)
        )
        return state.current_table_mapping

    def set_table_mapping(self, mapping: TableMapping) -> None:
        """Make a table mapping current, replacing any mapping of the same pair."""
        state = self.mapping_state
        state.current_table_mapping = mapping
        self._upsert_table_mapping(mapping)

    def _upsert_table_mapping(self, mapping: TableMapping) -> None:
        state = self.mapping_state
        for i, existing in enumerate(state.all_mappings):
            if existing.matches(mapping.source_table_id, mapping.target_table_id):
                state.all_mappings[i] = mapping
                return
        state.all_mappings.append(mapping)

    def load_table_mappings(self) -> int:
        """Seed table mappings from the suggestion provider; existing pairs are kept."""
        added = 0
        for mapping in self.suggestion_provider.table_mappings():
            if not self.mapping_state.find_table_mapping(mapping.source_table_id, mapping.target_table_id):
                self.mapping_state.all_mappings.append(mapping)
                added += 1
        return added

    def add_field_mapping(self, mapping: FieldMapping) -> None:
        """
        Add a user-authored mapping to the selected table pair.

        Raises:
            NotFoundError: If no table pair is selected
        """
        current = self.mapping_state.current_table_mapping
        if current is None:
            raise NotFoundError("No table pair selected")
        mapping.status = MappingStatus.MANUAL
        current.field_mappings.append(mapping)
        self._upsert_table_mapping(current)

    def remove_field_mapping(self, mapping_id: str) -> None:
        current = self.mapping_state.current_table_mapping
        if current is None or current.get_field_mapping(mapping_id) is None:
            raise NotFoundError(f"Field mapping not found: {mapping_id}")
        current.field_mappings = [m for m in current.field_mappings if m.id != mapping_id]

    def update_field_mapping(self, mapping_id: str, updates: Dict[str, Any]) -> FieldMapping:
        """
        Merge a partial update into a suggestion and every table mapping copy of it.

        Args:
            mapping_id: Field mapping ID
            updates: Attributes to overwrite, e.g. ``{"status": "approved"}``

        Returns:
            The updated suggestion, or the table entry when there is no suggestion

        Raises:
            NotFoundError: If neither the suggestions nor any table mapping have the ID
            MappingTransitionError: If the status change is not allowed; nothing is updated
        """
        state = self.mapping_state
        targets: List[FieldMapping] = []
        suggestion = state.get_suggestion(mapping_id)
        if suggestion:
            targets.append(suggestion)
        tables = [state.current_table_mapping] if state.current_table_mapping else []
        for table in tables + state.all_mappings:
            entry = table.get_field_mapping(mapping_id)
            if entry is not None and all(entry is not t for t in targets):
                targets.append(entry)
        if not targets:
            raise NotFoundError(f"Field mapping not found: {mapping_id}")

        # Check every copy before touching any of them
        status = updates.get("status")
        if status is not None:
            status = MappingStatus(status)
            for target in targets:
                if not target.can_transition(status):
                    raise MappingTransitionError(
                        f"Cannot move mapping {mapping_id} from {target.status.value} to {status.value}"
                    )

        for target in targets:
            target.apply(dict(updates))
        logger.debug(f"Updated field mapping {mapping_id}: {updates}")
        return targets[0]

    def accept_mapping(self, mapping_id: str) -> FieldMapping:
        return self.update_field_mapping(
            mapping_id, {"status": MappingStatus.APPROVED, "approved_at": self._now()}
        )

    def reject_mapping(self, mapping_id: str) -> FieldMapping:
        return self.update_field_mapping(mapping_id, {"status": MappingStatus.REJECTED})

    def revert_mapping(self, mapping_id: str) -> FieldMapping:
        """Send a rejected mapping back to review."""
        return self.update_field_mapping(
            mapping_id, {"status": MappingStatus.SUGGESTED, "approved_at": None}
        )

    def generate_ai_suggestions(self) -> List[FieldMapping]:
        """
        Replace the suggestion list with the provider's suggestions.

        Suggestions not already on the selected table pair are appended to it.
        A suggestion that already has a copy on a table mapping takes that
        copy's review status, so every copy of an ID stays in step.
        """
        state = self.mapping_state
        suggestions = self.suggestion_provider.suggest(state.current_table_mapping)

        current = state.current_table_mapping
        tables = [current] if current is not None else []
        for suggestion in suggestions:
            for table in tables + state.all_mappings:
                entry = table.get_field_mapping(suggestion.id)
                if entry is not None:
                    suggestion.status = entry.status
                    suggestion.approved_at = entry.approved_at
                    break
        state.suggestions = suggestions

        if current is not None:
            existing = {m.id for m in current.field_mappings}
            current.field_mappings.extend(
                copy.deepcopy(s) for s in suggestions
                if s.id not in existing and current.matches(s.source_table_id, s.target_table_id)
            )
        logger.info(f"Generated {len(suggestions)} mapping suggestions")
        return suggestions

    def bulk_accept_high_confidence(self) -> int:
        """
        Approve every suggestion with confidence of at least 90.

        Rejected suggestions are sent back to review first, so every
        high-confidence suggestion ends up approved.

        Returns:
            Number of suggestions newly approved
        """
        approved = 0
        for suggestion in list(self.mapping_state.suggestions):
            if suggestion.confidence < HIGH_CONFIDENCE_THRESHOLD:
                continue
            if suggestion.status == MappingStatus.REJECTED:
                self.revert_mapping(suggestion.id)
            if suggestion.status == MappingStatus.SUGGESTED:
                self.accept_mapping(suggestion.id)
                approved += 1
        logger.info(f"Bulk approved {approved} high-confidence suggestions")
        return approved

    def complete_mapping(self) -> None:
        """Stamp mapping as complete and record the phase."""
        state = self.mapping_state
        state.is_processing = False
        state.progress = 100
        state.current_step = "Mapping complete"
        state.completed_at = self._now()
        if self.current_project:
            self.current_project.progress.mark_completed(MigrationPhase.MAPPING)
            self.current_project.progress.mappings_complete = True
        self._save_project()

    def reset_mapping(self) -> None:
        self.mapping_state = MappingState()

    # ------------------------------------------------------------------
    # Code generation
    # ------------------------------------------------------------------

    def start_code_generation(self, step: str) -> None:
        state = self.code_generation_state
        state.is_processing = True
        state.current_step = step
        state.progress = min(state.progress + 20, 100)
        state.error = None

    def set_selected_platform(self, platform: CodePlatform) -> None:
        self.code_generation_state.selected_platform = CodePlatform(platform)

    def set_generated_code(self, platform: CodePlatform, code: GeneratedCode) -> None:
        """
        Store the artifact for a platform, replacing any previous one.

        The stored artifact's ``last_generated`` is always later than the one
        it replaces.
        """
        platform = CodePlatform(platform)
        if code.platform != platform:
            raise ValueError(f"Code for {code.platform.value} cannot fill the {platform.value} slot")

        state = self.code_generation_state
        previous = state.generated_codes.get(platform)
        if previous is not None and code.last_generated <= previous.last_generated:
            code.last_generated = previous.last_generated + timedelta(microseconds=1)

        state.generated_codes[platform] = code
        state.is_processing = False
        state.progress = 100

    def generate_code(self, platform: Optional[CodePlatform] = None) -> GeneratedCode:
        """Generate code for a platform (default: the selected one) and store it."""
        platform = CodePlatform(platform or self.code_generation_state.selected_platform)
        code = self.code_provider.generate(platform, self.mapping_state.all_mappings)
        self.set_generated_code(platform, code)
        self.code_generation_state.optimizations = self.code_provider.optimizations(platform)
        logger.info(f"Generated {code.file_name} ({code.size} chars) for {platform.value}")
        return code

    def fail_code_generation(self, error: str) -> None:
        self.code_generation_state.is_processing = False
        self.code_generation_state.error = error
        logger.error(f"Code generation failed: {error}")

    def complete_code_generation(self) -> None:
        """Stamp code generation as complete and record the phase."""
        state = self.code_generation_state
        state.is_processing = False
        state.completed_at = self._now()
        if self.current_project:
            self.current_project.progress.mark_completed(MigrationPhase.CODEGEN)
            self.current_project.progress.code_generated = True
        self._save_project()

    def set_original_code_for_comparison(self, code: str) -> None:
        self.code_generation_state.original_code_for_comparison = code

    def set_optimized_code_for_comparison(self, code: str) -> None:
        self.code_generation_state.optimized_code_for_comparison = code

    # ------------------------------------------------------------------
    # Validation and completion
    # ------------------------------------------------------------------

    def set_checklist_item(self, item_id: str, completed: bool) -> None:
        item = self.validation_checklist.get_item(item_id)
        if item is None:
            raise NotFoundError(f"Checklist item not found: {item_id}")
        item.completed = completed

    def complete_project(self) -> Optional[Project]:
        """
        Mark the current project as completed.

        Raises:
            PhaseTransitionError: If required checklist items are unchecked
        """
        project = self.current_project
        if project is None:
            logger.warning("complete_project called with no current project")
            return None

        checklist = self.validation_checklist
        if not checklist.is_satisfied:
            raise PhaseTransitionError(
                f"Checklist incomplete: {', '.join(checklist.missing_required)}"
            )

        project.status = ProjectStatus.COMPLETED
        for phase in MigrationPhase:
            project.progress.mark_completed(phase)
        project.progress.schemas_uploaded = True
        project.progress.mappings_complete = True
        project.progress.code_generated = True
        project.progress.validation_complete = True
        checklist.completed_at = self._now()
        self._save_project()
        logger.info(f"Project {project.id} completed")
        return project

    # ------------------------------------------------------------------
    # User profile
    # ------------------------------------------------------------------

    def set_user_profile(self, profile: UserProfile) -> None:
        self.user_profile = profile
        self._persist()

    def clear_user_profile(self) -> None:
        self.user_profile = UserProfile()
        self._persist()

    def to_dict(self) -> Dict[str, Any]:
        """Full in-process state, for display."""
        return {
            "current_project": self.current_project.to_dict() if self.current_project else None,
            "current_phase": self.current_phase.value,
            "can_proceed": self.can_proceed_to_next_phase(),
            "user_profile": self.user_profile.to_dict(),
            "source_files": [f.to_dict() for f in self.source_files],
            "target_files": [f.to_dict() for f in self.target_files],
            "upload_progress": self.upload_progress,
            "discovery": self.discovery_state.to_dict(),
            "mapping": self.mapping_state.to_dict(),
            "code_generation": self.code_generation_state.to_dict(),
            "validation": self.validation_checklist.to_dict(),
        }
