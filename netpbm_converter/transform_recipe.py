"""
Transform Recipe Parser

Parses YAML recipe files describing which Netpbm image to load, which
transforms to apply (in order), and how to write the result. Image and
output paths are resolved relative to the recipe file.

Example recipe:

    image: scan.pgm
    output: scan_mono.pbm
    operations: [rotate, invert, to_bitmap]
    format: P1
"""

import os
import yaml
from typing import List, Optional

from .netpbm_format import FormatTag

OPERATIONS = ("invert", "flip", "flop", "rotate", "to_bitmap", "to_greymap")


class TransformRecipe:
    """Class to handle transform recipes from YAML files."""

    def __init__(self, yaml_path: str):
        """
        Initialize TransformRecipe from a YAML file.

        Args:
            yaml_path: Path to the YAML recipe file
        """
        self.yaml_path = yaml_path
        self.yaml_dir = os.path.dirname(os.path.abspath(yaml_path))

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Recipe must be a mapping: {yaml_path}")

        self.image_path = self._resolve_path(data.get("image", ""))
        output = data.get("output")
        self.output_path = self._resolve_path(output) if output else None
        operations = data.get("operations") or []
        if not isinstance(operations, list):
            raise ValueError(
                f"operations must be a list of names, got {operations!r}"
            )
        self.operations: List[str] = operations

        format_name = data.get("format")
        self.format_tag: Optional[FormatTag] = (
            FormatTag.from_magic(str(format_name), yaml_path) if format_name else None
        )

        max_value = data.get("max_value")
        self.max_value: Optional[int] = int(max_value) if max_value is not None else None

        self._validate()

    def _resolve_path(self, path: str) -> str:
        """
        Resolve a path relative to the YAML file location.

        Args:
            path: Path from YAML file

        Returns:
            Absolute path, or "" when path is empty
        """
        if not path:
            return ""
        if os.path.isabs(path):
            return path
        else:
            return os.path.join(self.yaml_dir, path)

    def _validate(self):
        """Validate the parsed recipe."""
        if not self.image_path:
            raise ValueError("Image path not specified in YAML file")

        if not os.path.exists(self.image_path):
            raise FileNotFoundError(f"Image file not found: {self.image_path}")

        for operation in self.operations:
            if operation not in OPERATIONS:
                raise ValueError(
                    f"Unknown operation {operation!r}, expected one of {', '.join(OPERATIONS)}"
                )

        if self.max_value is not None and not 0 < self.max_value <= 255:
            raise ValueError(f"Invalid max_value: {self.max_value}")

    def __str__(self) -> str:
        """String representation of the recipe."""
        return (
            f"TransformRecipe(\n"
            f"  image: {self.image_path}\n"
            f"  output: {self.output_path}\n"
            f"  operations: {', '.join(self.operations) or 'none'}\n"
            f"  format: {self.format_tag.magic if self.format_tag else 'unchanged'}\n"
            f")"
        )
