"""Configuration for the migration wizard."""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class WizardConfig:
    """Runtime settings for the tracker, runner and export services."""

    # Local persisted state
    state_file: str = "./data/wizard_state.json"

    # Multiplier applied to every simulated step duration; 0 disables the delays
    delay_scale: float = 1.0

    # Refuse forward phase moves whose gate is closed
    enforce_gating: bool = True

    # Template used for the default project when no state has been persisted;
    # empty string starts with no project
    default_template: Optional[str] = "DB2 to BigQuery Enterprise"

    # Confidence at which suggestions are highlighted in listings
    high_confidence: int = 90

    # Output
    export_dir: str = "./data/exports"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "state_file": self.state_file,
            "delay_scale": self.delay_scale,
            "enforce_gating": self.enforce_gating,
            "default_template": self.default_template,
            "high_confidence": self.high_confidence,
            "export_dir": self.export_dir,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WizardConfig":
        """Create from dictionary representation."""
        return cls(
            state_file=data.get("state_file", "./data/wizard_state.json"),
            delay_scale=float(data.get("delay_scale", 1.0)),
            enforce_gating=data.get("enforce_gating", True),
            default_template=data.get("default_template", "DB2 to BigQuery Enterprise") or None,
            high_confidence=int(data.get("high_confidence", 90)),
            export_dir=data.get("export_dir", "./data/exports"),
        )

    @classmethod
    def from_env(cls) -> "WizardConfig":
        """Create from WIZARD_* environment variables."""
        return cls(
            state_file=os.environ.get("WIZARD_STATE_FILE", "./data/wizard_state.json"),
            delay_scale=float(os.environ.get("WIZARD_DELAY_SCALE", "1.0")),
            enforce_gating=_env_bool("WIZARD_ENFORCE_GATING", True),
            default_template=os.environ.get("WIZARD_DEFAULT_TEMPLATE", "DB2 to BigQuery Enterprise") or None,
            high_confidence=int(os.environ.get("WIZARD_HIGH_CONFIDENCE", "90")),
            export_dir=os.environ.get("WIZARD_EXPORT_DIR", "./data/exports"),
        )
