"""
Module: presets

Purpose:
    Named slicing-settings profiles. Presets are plain configuration
    values; where they are stored is up to the caller, this module only
    converts them to and from JSON text.

Key Classes:
    - Preset: Named SlicePolicy

Key Functions:
    - dumps_presets(): Serialize a preset list to JSON text
    - loads_presets(): Parse JSON text, skipping malformed entries

Dependencies:
    - json (std)
    - core.models.slices: SlicePolicy

Used By:
    - Callers that persist settings profiles
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, replace
from typing import Iterable, List

from ..errors import InvalidPolicyError
from .slices import SlicePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preset:
    """
    A named slicing policy.

    Attributes:
        id: Unique identifier (creation timestamp in ms by default)
        name: User-facing name
        policy: Stored slicing settings
    """

    id: str
    name: str
    policy: SlicePolicy

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Preset name must not be blank")

    @classmethod
    def create(cls, name: str, policy: SlicePolicy) -> Preset:
        """Create a preset with a timestamp-based id."""
        return cls(id=str(int(time.time() * 1000)), name=name.strip(), policy=policy)

    def renamed(self, name: str) -> Preset:
        return replace(self, name=name.strip())

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "settings": self.policy.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> Preset:
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            policy=SlicePolicy.from_dict(data["settings"]),
        )


def dumps_presets(presets: Iterable[Preset]) -> str:
    """Serialize presets to a JSON array."""
    return json.dumps([p.to_dict() for p in presets])


def loads_presets(text: str) -> List[Preset]:
    """
    Parse presets from JSON text.

    A document that is not valid JSON, or not a list, yields an empty list.
    Individual malformed entries are skipped with a warning so that one
    bad entry does not lose the rest.

    Args:
        text: JSON array produced by dumps_presets()

    Returns:
        Successfully parsed presets, in stored order
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse presets: {e}")
        return []

    if not isinstance(payload, list):
        logger.error(f"Presets payload must be a list, got {type(payload).__name__}")
        return []

    presets: List[Preset] = []
    for i, entry in enumerate(payload):
        try:
            presets.append(Preset.from_dict(entry))
        except (KeyError, TypeError, ValueError, InvalidPolicyError) as e:
            logger.warning(f"Skipping malformed preset #{i}: {e}")
    return presets
