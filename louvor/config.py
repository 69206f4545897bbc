"""
Configuration module for louvor.

Handles transposer defaults, the facts the assistant answers with,
and the list of recently opened chord sheets.
"""

import json
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class TransposeConfig:
    """Configuration for chord transposition."""
    min_semitones: int = -12
    max_semitones: int = 12
    chord_lines_only: bool = False
    encoding: str = "utf-8"


@dataclass
class AssistantConfig:
    """Facts the assistant answers with."""
    church_name: str = "Igreja Batista Central em Estância"
    church_short_name: str = "IBCE"
    pastors: List[str] = field(default_factory=lambda: [
        "Pastor Gadiel Lima",
        "Pastor Daniel Lima",
    ])
    leaders: List[str] = field(default_factory=lambda: [
        "Josué Alisson",
        "Bruno Barros",
    ])
    developer: str = "Josué Alisson"


@dataclass
class Config:
    """
    Main configuration class for louvor.

    Handles loading/saving settings from the config directory.
    """

    # Sub-configurations
    transpose: TransposeConfig = field(default_factory=TransposeConfig)
    assistant: AssistantConfig = field(default_factory=AssistantConfig)

    # Recent chord sheets
    recent_files: list = field(default_factory=list)
    recent_files_max: int = 10

    # Application directories
    _config_dir: Path = field(default_factory=lambda: Path.home() / ".louvor")
    _config_file: Path = field(default=None)

    def __post_init__(self):
        """Initialize configuration paths."""
        self._config_dir = Path(self._config_dir)
        self._config_file = self._config_dir / "config.json"

    @property
    def config_file(self) -> Path:
        """Path of the JSON settings file."""
        return self._config_file

    def save(self) -> None:
        """Save configuration to disk."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "transpose": asdict(self.transpose),
            "assistant": asdict(self.assistant),
            "recent_files": self.recent_files[:self.recent_files_max],
            "recent_files_max": self.recent_files_max,
        }

        with open(self._config_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, config_dir: Optional[Path] = None) -> "Config":
        """Load configuration from disk or create default."""
        config = cls() if config_dir is None else cls(_config_dir=Path(config_dir))

        if config._config_file.exists():
            try:
                with open(config._config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                if not isinstance(data, dict):
                    logger.warning(f"Ignoring config file that is not a JSON object: {config._config_file}")
                    return config

                if "transpose" in data:
                    config.transpose = TransposeConfig(**data["transpose"])
                if "assistant" in data:
                    config.assistant = AssistantConfig(**data["assistant"])

                config.recent_files_max = data.get("recent_files_max", config.recent_files_max)
                config.recent_files = data.get("recent_files", [])

            except (json.JSONDecodeError, TypeError, KeyError) as e:
                logger.warning(f"Could not load config file: {e}")

        return config

    def add_recent_file(self, filepath: str) -> None:
        """Add a chord sheet to the recent files list."""
        filepath = str(filepath)

        # Remove if already exists
        if filepath in self.recent_files:
            self.recent_files.remove(filepath)

        # Add to front
        self.recent_files.insert(0, filepath)

        # Trim to max length
        self.recent_files = self.recent_files[:self.recent_files_max]

        self.save()


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config
