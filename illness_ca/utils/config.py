"""Simulation configuration."""
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from .board import RuleParameters


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SimulationConfig:
    """Everything a simulation run needs.

    Defaults reproduce the reference run: a 200x160 board, k1=2.0, k2=3.0,
    g=3 and 480 frames written as ``png/foo-0000.png`` onwards.
    """
    width: int = 200
    height: int = 160
    k1: float = 2.0
    k2: float = 3.0
    g: int = 3
    iterations: int = 480
    seed: Optional[int] = None
    output_dir: str = 'png'
    prefix: str = 'foo'

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ValueError on the first invalid field."""
        for name in ('width', 'height'):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not _is_int(self.iterations) or self.iterations < 0:
            raise ValueError(f"iterations must be a non-negative integer, got {self.iterations!r}")
        if self.seed is not None and (not _is_int(self.seed) or self.seed < 0):
            raise ValueError(f"seed must be a non-negative integer or None, got {self.seed!r}")
        if not self.prefix:
            raise ValueError("prefix must not be empty")
        # Checks k1, k2 and g
        self.params

    @property
    def params(self) -> RuleParameters:
        return RuleParameters(k1=float(self.k1), k2=float(self.k2), g=self.g)

    @property
    def grid_size(self):
        """Grid dimensions as (height, width)."""
        return self.height, self.width

    def to_dict(self) -> dict:
        return asdict(self)

    def with_overrides(self, **overrides) -> 'SimulationConfig':
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return replace(self, **changes)

    @classmethod
    def from_yaml(cls, path) -> 'SimulationConfig':
        """Load a config file; missing keys keep their defaults."""
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        return cls().with_overrides(**data)
