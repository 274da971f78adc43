"""Runtime configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class FormguardConfig:
    """Where forms live and how messages and logs are rendered."""

    forms_path: Path
    language: str = "en"
    log_level: str = "info"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> FormguardConfig:
        """Create config from environment variables.

        Resolution order for the forms directory:
        1. FORMGUARD_FORMS_PATH env var
        2. {base_path}/forms
        3. forms/ next to the current directory (the repo root when run from backend/)
        """
        forms_path = os.environ.get("FORMGUARD_FORMS_PATH")
        if forms_path:
            path = Path(forms_path)
        elif base_path:
            path = base_path / "forms"
        else:
            cwd = Path.cwd()
            path = (cwd.parent if cwd.name == "backend" else cwd) / "forms"

        return cls(
            forms_path=path,
            language=os.environ.get("FORMGUARD_LANGUAGE", "en"),
            log_level=os.environ.get("FORMGUARD_LOG_LEVEL", "info").lower(),
        )
