"""Exceptions raised by the migration wizard."""


class WizardError(Exception):
    """Base class for wizard errors."""


class NotFoundError(WizardError):
    """A project, file or mapping could not be found."""


class PhaseTransitionError(WizardError):
    """A phase change was refused by the gating rules."""


class MappingTransitionError(WizardError):
    """A field mapping status change is not allowed."""


class SchemaFileError(WizardError):
    """A schema file could not be read or parsed."""


class ExportError(WizardError):
    """An export artifact could not be produced."""
