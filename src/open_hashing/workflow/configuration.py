from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from open_hashing.errors import InvalidArgumentError
from open_hashing.hashing import HASH_BASE, MAX_HASH_LENGTH
from open_hashing.schemes import (
    CollisionScheme,
    EmptyMarkerScheme,
    parse_collision_scheme,
    parse_empty_marker_scheme,
)


class HashTableConfig(BaseModel):
    """Configuration knobs for an open addressing hash table."""

    model_config = ConfigDict(validate_assignment=True)

    initial_size: int = Field(default=100, gt=0)  # rounded up to a prime
    collision_scheme: CollisionScheme = Field(default=CollisionScheme.DOUBLE)
    empty_marker_scheme: EmptyMarkerScheme = Field(default=EmptyMarkerScheme.AVAILABLE)

    # Growth policy
    rehash_threshold: float = Field(default=0.75)
    auto_resize: bool = Field(default=True)
    expand_by_factor: bool = Field(default=True)
    expansion_factor: float = Field(default=2.0, gt=1.0)
    expansion_increment: int = Field(default=10, gt=1)

    hash_base: int = Field(default=HASH_BASE, gt=1)
    max_hash_length: Optional[int] = Field(default=MAX_HASH_LENGTH, gt=0)
    seed: Optional[int] = Field(default=None)  # compressor coefficients

    @field_validator("collision_scheme", mode="before")
    @classmethod
    def _parse_collision_scheme(cls, value: Any) -> CollisionScheme:
        try:
            return parse_collision_scheme(value)
        except InvalidArgumentError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("empty_marker_scheme", mode="before")
    @classmethod
    def _parse_empty_marker_scheme(cls, value: Any) -> EmptyMarkerScheme:
        try:
            return parse_empty_marker_scheme(value)
        except InvalidArgumentError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("rehash_threshold")
    @classmethod
    def _check_threshold(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("rehash_threshold must be in (0, 1]")
        return value


class ConfigLoader:
    """Loads table configuration from YAML files."""

    def load(self, path: Path) -> HashTableConfig:
        data = self._read_yaml(path)
        section = data.get("hash_table", data)
        return HashTableConfig.model_validate(section)

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
        return data or {}
