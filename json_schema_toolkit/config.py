"""
Configuration for validation and generation.

Each section is a dataclass with `from_dict`/`to_dict` so a configuration can
be loaded from a JSON file; unknown keys are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ValidatorConfig:
    """Configuration options for validation."""

    # Report references to missing definitions instead of accepting the value
    strict_refs: bool = False

    # Check minProperties/maxProperties against the keys present
    enforce_property_bounds: bool = False

    @staticmethod
    def from_dict(d: dict) -> ValidatorConfig:
        """Create a config from a dictionary."""
        config = ValidatorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "strict_refs": self.strict_refs,
            "enforce_property_bounds": self.enforce_property_bounds,
        }


@dataclass
class FuzzConfig:
    """Configuration options for the generator."""

    # Arrays without maxItems grow at most this far past their minimum
    array_length_slack: int = 10

    # Filler items a tuple may carry beyond its required length
    tuple_filler_slack: int = 100

    # Width of the cluster drawn next to a one-sided numeric bound
    boundary_offset: int = 10

    @staticmethod
    def from_dict(d: dict) -> FuzzConfig:
        """Create a config from a dictionary."""
        config = FuzzConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "array_length_slack": self.array_length_slack,
            "tuple_filler_slack": self.tuple_filler_slack,
            "boundary_offset": self.boundary_offset,
        }


@dataclass
class ToolkitConfig:
    """Top-level configuration, as read from a `--config` file."""

    validator: ValidatorConfig = field(default_factory=ValidatorConfig)
    fuzz: FuzzConfig = field(default_factory=FuzzConfig)

    @staticmethod
    def from_dict(d: dict) -> ToolkitConfig:
        """Create a config from a dictionary."""
        config = ToolkitConfig()
        if isinstance(d.get("validator"), dict):
            config.validator = ValidatorConfig.from_dict(d["validator"])
        if isinstance(d.get("fuzz"), dict):
            config.fuzz = FuzzConfig.from_dict(d["fuzz"])
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "validator": self.validator.to_dict(),
            "fuzz": self.fuzz.to_dict(),
        }
