from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from spriteforge.core.errors import InvalidConfig


DEFAULT_SEED = 1337
DEFAULT_OUTPUT_DIR = "sprites_out"

PNG_SUFFIX = ".png"
STATS_SUFFIX = ".json"
MANIFEST_FILE = "manifest.json"
JSON_INDENT = 2

# Batch fan-out. 1 keeps generation on the calling thread.
DEFAULT_WORKERS = 1
MAX_WORKERS = 16

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Largest canvas side any configuration may request.
MAX_CANVAS_SIDE = 1024


@dataclass
class GenerationSettings:
    """Run-level settings shared by the CLI and batch export."""

    seed: int | None = DEFAULT_SEED
    output_dir: str = DEFAULT_OUTPUT_DIR
    workers: int = DEFAULT_WORKERS
    log_level: str = "INFO"
    overwrite: bool = False

    def validate(self) -> None:
        if not 1 <= self.workers <= MAX_WORKERS:
            raise InvalidConfig(f"workers must be in 1..{MAX_WORKERS}, got {self.workers}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise InvalidConfig(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        if not self.output_dir:
            raise InvalidConfig("output_dir must not be empty")

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationSettings":
        seed = data.get("seed", DEFAULT_SEED)
        settings = cls(
            seed=None if seed is None else int(seed),
            output_dir=str(data.get("output_dir", DEFAULT_OUTPUT_DIR)),
            workers=int(data.get("workers", DEFAULT_WORKERS)),
            log_level=str(data.get("log_level", "INFO")).upper(),
            overwrite=bool(data.get("overwrite", False)),
        )
        settings.validate()
        return settings
