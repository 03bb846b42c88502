"""Configuration for the snipeek command-line tool."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, get_args

from .hostname import is_valid_hostname

InputFormat = Literal["auto", "raw", "hex"]
OutputFormat = Literal["text", "json", "csv"]

INPUT_FORMATS: tuple[str, ...] = get_args(InputFormat)
OUTPUT_FORMATS: tuple[str, ...] = get_args(OutputFormat)


@dataclass
class Config:
    """Configuration for SNI extraction runs.

    Attributes:
        input_format: How capture files are read ("raw" bytes, "hex" text,
            or "auto" to detect hex text and fall back to raw).
        output_format: Result format ("text", "json" lines, or "csv").
        default_server_name: Name reported when a file has no usable SNI.
            None leaves such rows empty.
        strict: Whether any decode failure makes the run exit non-zero.
    """

    input_format: InputFormat = "auto"
    output_format: OutputFormat = "text"
    default_server_name: str | None = None
    strict: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.input_format not in INPUT_FORMATS:
            raise ValueError(f"input_format must be one of {', '.join(INPUT_FORMATS)}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        if self.default_server_name is not None and not is_valid_hostname(self.default_server_name):
            raise ValueError(f"default_server_name is not a valid hostname: {self.default_server_name!r}")
        if not isinstance(self.strict, bool):
            raise ValueError(f"strict must be true or false, got {self.strict!r}")

    def resolve_server_name(self, server_name: str | None) -> str | None:
        """Apply the configured default to a missing server name."""
        if server_name is None:
            return self.default_server_name
        return server_name

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration.
        """
        return {
            "input_format": self.input_format,
            "output_format": self.output_format,
            "default_server_name": self.default_server_name,
            "strict": self.strict,
        }

    def to_json(self, path: str | Path) -> None:
        """Save configuration to JSON file.

        Args:
            path: Path to output JSON file.
        """
        path = Path(path)
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file.

        Args:
            path: Path to output YAML file.
        """
        import yaml

        path = Path(path)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create configuration from dictionary.

        Args:
            data: Dictionary with configuration values.

        Returns:
            Config instance.
        """
        return cls(
            input_format=data.get("input_format", "auto"),
            output_format=data.get("output_format", "text"),
            default_server_name=data.get("default_server_name"),
            strict=data.get("strict", False),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> Config:
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file does not exist.
            json.JSONDecodeError: If file is not valid JSON.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from YAML file.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        import yaml

        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from file (auto-detect format).

        Supports JSON (.json) and YAML (.yaml, .yml) files.

        Raises:
            ValueError: If file extension is not recognized.
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == ".json":
            return cls.from_json(path)
        elif suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        else:
            raise ValueError(f"Unsupported config file format: {suffix}. Use .json or .yaml/.yml")
