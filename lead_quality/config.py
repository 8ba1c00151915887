"""Scoring policy constants and configuration file helpers."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


# Quality score weighting (contact completeness outweighs location).
CONTACT_WEIGHT = 0.6
LOCATION_WEIGHT = 0.4

# Tier thresholds, lower-inclusive.
EXCELLENT_THRESHOLD = 80
OKAY_THRESHOLD = 50

# Location relevance when there is nothing to compare against.
UNKNOWN_LOCATION_RELEVANCE = 50
NEARBY_AREA_RELEVANCE = 75

# Free preview sizing.
PREVIEW_RATIO = 0.10
PREVIEW_MIN = 5
PREVIEW_MAX = 15

# One pricing block per 100 leads or fraction thereof.
PRICE_BLOCK_SIZE = 100
PRICE_PER_BLOCK = 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""

    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class ScoringPolicy:
    """Every tunable number used by the scorer, tier classifier, and freemium selector."""

    contact_weight: float = CONTACT_WEIGHT
    location_weight: float = LOCATION_WEIGHT
    excellent_threshold: int = EXCELLENT_THRESHOLD
    okay_threshold: int = OKAY_THRESHOLD
    unknown_location_relevance: int = UNKNOWN_LOCATION_RELEVANCE
    nearby_area_relevance: int = NEARBY_AREA_RELEVANCE
    preview_ratio: float = PREVIEW_RATIO
    preview_min: int = PREVIEW_MIN
    preview_max: int = PREVIEW_MAX
    price_block_size: int = PRICE_BLOCK_SIZE
    price_per_block: int = PRICE_PER_BLOCK

    def validate(self) -> "ScoringPolicy":
        if self.contact_weight < 0 or self.location_weight < 0:
            raise ConfigurationError("Scoring weights must not be negative")
        if not math.isclose(self.contact_weight + self.location_weight, 1.0):
            raise ConfigurationError(
                f"Scoring weights must sum to 1.0 (got {self.contact_weight + self.location_weight})"
            )
        if not 0 <= self.okay_threshold <= self.excellent_threshold <= 100:
            raise ConfigurationError(
                "Tier thresholds must satisfy 0 <= okay_threshold <= excellent_threshold <= 100"
            )
        for name in ("unknown_location_relevance", "nearby_area_relevance"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigurationError(f"'{name}' must be a percentage between 0 and 100")
        if self.preview_ratio < 0:
            raise ConfigurationError("'preview_ratio' must not be negative")
        if not 0 <= self.preview_min <= self.preview_max:
            raise ConfigurationError("Preview bounds must satisfy 0 <= preview_min <= preview_max")
        if self.price_block_size <= 0:
            raise ConfigurationError("'price_block_size' must be positive")
        if self.price_per_block < 0:
            raise ConfigurationError("'price_per_block' must not be negative")
        return self


DEFAULT_POLICY = ScoringPolicy()

_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid JSON: {exc}") from exc
    else:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - dependency optional
            raise ConfigurationError(
                "YAML configuration requires the 'pyyaml' package to be installed"
            ) from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


def policy_from_mapping(config: Mapping[str, Any], base: ScoringPolicy = DEFAULT_POLICY) -> ScoringPolicy:
    """Build a validated policy from the ``scoring`` section of a configuration mapping."""

    section = config.get("scoring", {}) or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError("The 'scoring' configuration section must be a mapping")

    known = {item.name: item for item in fields(ScoringPolicy)}
    overrides: Dict[str, Any] = {}
    for key, value in section.items():
        if key not in known:
            raise ConfigurationError(f"Unknown scoring option '{key}'")
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Scoring option '{key}' must be numeric (got {value!r})") from exc
        if isinstance(value, bool) or not math.isfinite(number):
            raise ConfigurationError(f"Scoring option '{key}' must be numeric (got {value!r})")
        if known[key].type in (float, "float"):
            overrides[key] = number
        elif number.is_integer():
            overrides[key] = int(number)
        else:
            raise ConfigurationError(f"Scoring option '{key}' must be a whole number (got {value!r})")

    if overrides:
        LOGGER.debug("Applying scoring overrides: %s", overrides)
    return replace(base, **overrides).validate()


def load_policy(path: str | Path) -> ScoringPolicy:
    """Load a scoring policy from a JSON or YAML configuration file."""

    return policy_from_mapping(load_configuration(path))
