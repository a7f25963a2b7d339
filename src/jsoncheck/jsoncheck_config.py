"""
Configuration management for jsoncheck.
"""

import os
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, List

import yaml

from jsoncheck.jsoncheck_error import JSONCheckConfigError


# Each nesting level costs two Python stack frames in the validator
MAX_DEPTH_LIMIT = 400


class JSONCheckErrorPolicy(Enum):
    """What the validator does after recording a syntax violation."""

    # Stop the walk at the first violation
    FAIL_FAST = "fail-fast"

    # Skip to the next member of the enclosing object or array and carry on
    COLLECT = "collect"


@dataclass
class JSONCheckConfig:
    """Options controlling how strictly documents are validated."""

    error_policy: JSONCheckErrorPolicy = JSONCheckErrorPolicy.FAIL_FAST
    max_errors: int = 100
    max_depth: int = 256
    require_object_root: bool = True
    strict_commas: bool = False
    strict_strings: bool = False
    strict_numbers: bool = False
    reject_trailing_tokens: bool = False

    @classmethod
    def strict(cls) -> 'JSONCheckConfig':
        """Create a configuration with every strict option enabled."""
        return cls(
            strict_commas=True,
            strict_strings=True,
            strict_numbers=True,
            reject_trailing_tokens=True
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JSONCheckConfig':
        """
        Build a configuration from a mapping, such as a parsed YAML document.

        Args:
            data: Option names mapped to values; missing options keep their defaults

        Returns:
            The new configuration

        Raises:
            JSONCheckConfigError: If any option is unknown or has an invalid value
        """
        if not isinstance(data, dict):
            raise JSONCheckConfigError(
                "Configuration must be a mapping of option names to values",
                context=f"Got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise JSONCheckConfigError(
                f"Unknown configuration option(s): {', '.join(str(u) for u in unknown)}",
                context=f"Valid options: {', '.join(sorted(known))}"
            )

        values = dict(data)
        if 'error_policy' in values:
            policy = values['error_policy']
            try:
                values['error_policy'] = JSONCheckErrorPolicy(policy)

            except ValueError as e:
                choices = ", ".join(p.value for p in JSONCheckErrorPolicy)
                raise JSONCheckConfigError(
                    f"Unknown error policy: {policy!r}",
                    context=f"Valid policies: {choices}"
                ) from e

        config = cls(**values)
        errors = config.validate()
        if errors:
            raise JSONCheckConfigError("Invalid configuration", context="; ".join(errors))

        return config

    @classmethod
    def load_from_file(cls, config_path: str) -> 'JSONCheckConfig':
        """Load configuration from a YAML file."""
        if not os.path.exists(config_path):
            raise JSONCheckConfigError("Configuration file not found", source_name=config_path)

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

        except yaml.YAMLError as e:
            raise JSONCheckConfigError("Configuration file is not valid YAML", source_name=config_path, context=str(e)) from e

        except OSError as e:
            raise JSONCheckConfigError("Configuration file cannot be read", source_name=config_path, context=str(e)) from e

        # An empty file means "all defaults"
        if data is None:
            return cls()

        try:
            return cls.from_dict(data)

        except JSONCheckConfigError as e:
            raise JSONCheckConfigError(e.message, source_name=config_path, context=e.context) from e

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=True)

    def to_dict(self) -> Dict[str, Any]:
        """Get the configuration as plain values suitable for YAML."""
        data = asdict(self)
        data['error_policy'] = self.error_policy.value
        return data

    def with_overrides(self, **overrides: Any) -> 'JSONCheckConfig':
        """
        Create a copy with some options replaced.

        Options given as None are left unchanged.
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> List[str]:
        """Validate the configuration and return any problems found."""
        errors = []

        if not isinstance(self.error_policy, JSONCheckErrorPolicy):
            errors.append(f"error_policy must be one of: {', '.join(p.value for p in JSONCheckErrorPolicy)}")

        for name in ('max_errors', 'max_depth'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer")

            elif value < 1:
                errors.append(f"{name} must be at least 1")

            elif name == 'max_depth' and value > MAX_DEPTH_LIMIT:
                errors.append(f"max_depth must be at most {MAX_DEPTH_LIMIT}")

        for name in ('require_object_root', 'strict_commas', 'strict_strings', 'strict_numbers', 'reject_trailing_tokens'):
            if not isinstance(getattr(self, name), bool):
                errors.append(f"{name} must be true or false")

        return errors
