"""Pydantic base model persisted as YAML."""

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ..errors import ConfigError
from ..utils.storage import atomic_write

T = TypeVar("T", bound="ConfigModel")


class ConfigModel(BaseModel):
    """Base model with YAML loading/saving capabilities."""

    @classmethod
    def from_yaml(cls: type[T], path: Path) -> T:
        """
        Load and validate a model from a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Validated model instance

        Raises:
            ConfigError: On file not found, invalid YAML, or validation errors
        """
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise cls._yaml_error(e, path) from e
        except OSError as e:
            raise ConfigError(f"Error reading configuration file {path}: {e}") from e

        try:
            return cls(**(data or {}))
        except ValidationError as e:
            raise cls._validation_error(e, path) from e

    @classmethod
    def load_or_default(cls: type[T], path: Path | None, **defaults) -> T:
        """
        Load from YAML, or build from ``defaults`` when the file is absent.

        Args:
            path: Optional path to YAML file
            **defaults: Default values if the file does not exist

        Returns:
            Model instance
        """
        if path and path.exists():
            return cls.from_yaml(path)
        return cls(**defaults)

    def to_yaml(self, path: Path):
        """
        Write the model to a YAML file atomically.

        Args:
            path: Path to write YAML file
        """
        atomic_write(path, self.to_yaml_string().encode())

    def to_yaml_string(self) -> str:
        """
        Convert the model to a YAML string.

        Returns:
            YAML formatted string of the model
        """
        return yaml.safe_dump(
            self.model_dump(mode="json", by_alias=True, exclude_unset=False),
            default_flow_style=False,
            sort_keys=False,
        )

    @classmethod
    def _validation_error(cls, error: ValidationError, path: Path) -> ConfigError:
        """Build a readable error from pydantic validation errors."""
        lines = [f"Invalid {cls.__name__} in {path.name}:"]

        for err in error.errors():
            field_path = " → ".join(str(loc) for loc in err["loc"])
            if "missing" in err["type"]:
                lines.append(f"  Missing required field: {field_path}")
            else:
                lines.append(f"  {field_path}: {err['msg']}")

        return ConfigError("\n".join(lines))

    @classmethod
    def _yaml_error(cls, error: yaml.YAMLError, path: Path) -> ConfigError:
        """Build a readable error from a YAML parsing error."""
        message = f"Invalid YAML syntax in {path.name}"

        # PyYAML marks are 0-based
        if hasattr(error, "problem_mark"):
            mark = error.problem_mark
            message += f" (line {mark.line + 1}, column {mark.column + 1})"

        return ConfigError(f"{message}: {error}")
