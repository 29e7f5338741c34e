"""
Configuration for histocr enhancement and comparison.

All options have sensible defaults. Create a config only if you need
to customize behavior, or load one from YAML:

    database_url: sqlite:///histocr.db
    enhancer:
      high_confidence_threshold: 0.9
    trainer:
      training_dir: training_data/ocr_discrepancies
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from histocr.exceptions import ConfigurationError


def _check_unit_interval(name: str, value: float) -> None:
    if value < 0.0 or value > 1.0:
        raise ConfigurationError(f"{name} must be between 0.0 and 1.0, got {value}")


@dataclass
class EnhancerConfig:
    """
    Configuration for the cursive OCR enhancer.

    Example:
        >>> enhancer = CursiveOCREnhancer(config=EnhancerConfig(max_workers=8))
    """

    # Cursive fixes are skipped when the OCR engine is more confident than this
    high_confidence_threshold: float = 0.9

    # Name validation: strictly above autocorrect -> replace, above suggestion -> suggest
    name_autocorrect_threshold: float = 0.9
    name_suggestion_threshold: float = 0.75

    # Learned corrections loaded from the correction store
    learned_min_frequency: int = 2
    learned_limit: int = 500

    # Thread pool size for parallel batch enhancement
    max_workers: int = 4

    def __post_init__(self):
        """Validate configuration."""
        _check_unit_interval("high_confidence_threshold", self.high_confidence_threshold)
        _check_unit_interval("name_autocorrect_threshold", self.name_autocorrect_threshold)
        _check_unit_interval("name_suggestion_threshold", self.name_suggestion_threshold)
        if self.name_suggestion_threshold > self.name_autocorrect_threshold:
            raise ConfigurationError(
                "name_suggestion_threshold must not exceed name_autocorrect_threshold, "
                f"got {self.name_suggestion_threshold} > {self.name_autocorrect_threshold}"
            )
        if self.learned_min_frequency < 1:
            raise ConfigurationError(
                f"learned_min_frequency must be >= 1, got {self.learned_min_frequency}"
            )
        if self.learned_limit < 1:
            raise ConfigurationError(f"learned_limit must be >= 1, got {self.learned_limit}")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")


@dataclass
class TrainerConfig:
    """
    Configuration for the OCR comparison trainer.

    Thresholds are inclusive lower bounds: a similarity of exactly
    ``excellent_threshold`` is excellent.
    """

    excellent_threshold: float = 0.95
    good_threshold: float = 0.80

    # Where flagged discrepancies are written as JSON training examples
    training_dir: Path = Path("training_data/ocr_discrepancies")
    save_training_examples: bool = True

    def __post_init__(self):
        """Validate configuration."""
        self.training_dir = Path(self.training_dir)
        if not (0.0 <= self.good_threshold <= self.excellent_threshold <= 1.0):
            raise ConfigurationError(
                "thresholds must satisfy 0 <= good <= excellent <= 1, "
                f"got good={self.good_threshold}, excellent={self.excellent_threshold}"
            )


@dataclass
class HistOCRConfig:
    """Top-level configuration: storage location plus component settings."""

    database_url: str | None = None
    enhancer: EnhancerConfig = field(default_factory=EnhancerConfig)
    trainer: TrainerConfig = field(default_factory=TrainerConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistOCRConfig":
        """
        Build a configuration from a plain dictionary.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        data = dict(data or {})
        _reject_unknown("config", data, {"database_url", "enhancer", "trainer"})

        enhancer_data = data.get("enhancer") or {}
        trainer_data = data.get("trainer") or {}
        _reject_unknown("enhancer", enhancer_data, {f.name for f in fields(EnhancerConfig)})
        _reject_unknown("trainer", trainer_data, {f.name for f in fields(TrainerConfig)})

        return cls(
            database_url=data.get("database_url"),
            enhancer=EnhancerConfig(**enhancer_data),
            trainer=TrainerConfig(**trainer_data),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "HistOCRConfig":
        """
        Load configuration from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Parsed and validated HistOCRConfig

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the YAML is malformed or holds invalid values
        """
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Malformed config file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)


def _reject_unknown(section: str, data: Any, allowed: set[str]) -> None:
    if not isinstance(data, dict):
        raise ConfigurationError(f"{section} must be a mapping, got {type(data).__name__}")
    unknown = set(data) - allowed
    if unknown:
        raise ConfigurationError(f"Unknown {section} option(s): {', '.join(sorted(unknown))}")
