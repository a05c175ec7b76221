"""Frontend configuration.

The core never reads the environment; the CLI and other hosts build a
HistoryConfig and pass its values in.

Environment Variables:
    HISTFILE_PATH: History file location (default: ~/.histfile_history)
    HISTFILE_MAX_SIZE: Capacity for live additions (default: 500)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from histfile.core.store import DEFAULT_MAX_SIZE

HISTORY_PATH_ENV = "HISTFILE_PATH"
MAX_SIZE_ENV = "HISTFILE_MAX_SIZE"

DEFAULT_HISTORY_PATH = Path.home() / ".histfile_history"


@dataclass
class HistoryConfig:
    """History settings.

    Attributes:
        path: History file location.
        max_size: Capacity applied to live additions.
    """

    path: Path = field(default_factory=lambda: DEFAULT_HISTORY_PATH)
    max_size: int = DEFAULT_MAX_SIZE

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> HistoryConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Raises:
            ValueError: If HISTFILE_MAX_SIZE is not a positive integer.
        """
        env = os.environ if environ is None else environ
        config = cls()

        path = env.get(HISTORY_PATH_ENV, "").strip()
        if path:
            config.path = Path(path).expanduser()

        max_size = env.get(MAX_SIZE_ENV, "").strip()
        if max_size:
            try:
                config.max_size = int(max_size)
            except ValueError:
                raise ValueError(f"{MAX_SIZE_ENV} must be an integer, got {max_size!r}") from None
            if config.max_size <= 0:
                raise ValueError(f"{MAX_SIZE_ENV} must be positive, got {config.max_size}")

        return config
