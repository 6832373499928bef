"""Illness automaton on a toroidal byte grid."""
import math
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

HEALTHY = 0
ILLED = 255

# (dy, dx) in neighborhood order: NW, N, NE, W, E, SW, S, SE
NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


@dataclass(frozen=True)
class RuleParameters:
    """Constants of the transition rule.

    Attributes:
        k1: Infection divisor applied to the infected-neighbor count
        k2: Illness divisor applied to the illed-neighbor count
        g: Growth increment added to an infected cell every generation
    """
    k1: float = 2.0
    k2: float = 3.0
    g: int = 3

    def __post_init__(self):
        for name in ('k1', 'k2'):
            value = getattr(self, name)
            # the rule divides in float32
            single = np.float32(value)
            if not math.isfinite(value) or not np.isfinite(single) or single <= 0:
                raise ValueError(f"{name} must be a finite positive number, got {value!r}")
        if not 0 <= int(self.g) <= 255 or int(self.g) != self.g:
            raise ValueError(f"g must be an integer in [0, 255], got {self.g!r}")


def transition_rule(value: int, neighborhood: Sequence[int], params: RuleParameters) -> int:
    """Return the next state of a single cell.

    Args:
        value: Current cell state (0..255)
        neighborhood: The 8 Moore-neighborhood states, cell itself excluded
        params: Rule constants

    Returns:
        Next cell state, clamped to 255
    """
    value = int(value)
    if value == ILLED:
        return HEALTHY

    c_infected = sum(1 for v in neighborhood if HEALTHY < v < ILLED)
    if value == HEALTHY:
        c_illed = sum(1 for v in neighborhood if v == ILLED)
        n1 = math.floor(min(np.float32(c_infected) / np.float32(params.k1), ILLED))
        n2 = math.floor(min(np.float32(c_illed) / np.float32(params.k2), ILLED))
        next_value = n1 + n2
    elif c_infected == 0:
        # Isolated infected cell: the growth quotient is undefined, no growth.
        next_value = value
    else:
        total = value + sum(int(v) for v in neighborhood)
        next_value = math.floor(np.float32(total) / np.float32(c_infected)) + int(params.g)

    return min(next_value, ILLED)


def next_state(state: np.ndarray, params: RuleParameters,
               out: Optional[np.ndarray] = None) -> np.ndarray:
    """Apply the transition rule to every cell of a (H, W) grid at once.

    Every value is computed from ``state``; ``out`` must not share memory
    with it.
    """
    state = np.asarray(state, dtype=np.uint8)
    if out is None:
        out = np.empty_like(state)

    c_infected = np.zeros(state.shape, dtype=np.float32)
    c_illed = np.zeros(state.shape, dtype=np.float32)
    total = state.astype(np.float32)
    for dy, dx in NEIGHBOR_OFFSETS:
        shifted = np.roll(state, (-dy, -dx), axis=(0, 1))
        c_infected += (shifted > HEALTHY) & (shifted < ILLED)
        c_illed += (shifted == ILLED)
        total += shifted

    infection = (np.floor(np.minimum(c_infected / np.float32(params.k1), ILLED))
                 + np.floor(np.minimum(c_illed / np.float32(params.k2), ILLED)))

    has_infected = c_infected > 0
    quotient = np.zeros_like(total)
    np.divide(total, c_infected, out=quotient, where=has_infected)
    growth = np.where(has_infected, np.floor(quotient) + np.float32(params.g), state)

    result = np.where(state == HEALTHY, infection, growth)
    result = np.where(state == ILLED, HEALTHY, result)
    np.minimum(result, ILLED, out=result)
    np.copyto(out, result, casting='unsafe')
    return out


class Board:
    """Fixed-size toroidal grid of byte cell states.

    Cells live in a flat row-major buffer (index ``y * width + x``). A second
    buffer of the same size receives each new generation and the two are
    swapped at the end of ``step``.
    """

    def __init__(self, width: int, height: int):
        """Create an all-healthy board."""
        if int(width) != width or int(height) != height or width < 1 or height < 1:
            raise ValueError(f"Board dimensions must be positive integers, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        size = self.width * self.height
        self._buffers = [np.zeros(size, dtype=np.uint8), np.zeros(size, dtype=np.uint8)]
        self._current = 0
        self.generation = 0

    @classmethod
    def from_array(cls, state: np.ndarray) -> 'Board':
        """Build a board from a (height, width) array of values in 0..255."""
        state = np.asarray(state)
        if state.ndim != 2:
            raise ValueError(f"Expected a 2-D (height, width) array, got shape {state.shape}")
        if not np.issubdtype(state.dtype, np.integer):
            raise ValueError(f"Cell values must be integers, got dtype {state.dtype}")
        if state.size and (state.min() < 0 or state.max() > ILLED):
            raise ValueError("Cell values must be in [0, 255]")
        height, width = state.shape
        board = cls(width, height)
        board._buffers[board._current][:] = state.astype(np.uint8).ravel()
        return board

    def copy(self) -> 'Board':
        """Return an independent board with the same cells and generation."""
        other = Board(self.width, self.height)
        other._buffers[other._current][:] = self._buffers[self._current]
        other.generation = self.generation
        return other

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def cells(self) -> np.ndarray:
        """Read-only flat view of the current generation."""
        view = self._buffers[self._current].view()
        view.flags.writeable = False
        return view

    @property
    def state(self) -> np.ndarray:
        """Read-only (height, width) view of the current generation."""
        return self.cells.reshape(self.height, self.width)

    def seed(self, rng: Optional[np.random.Generator] = None) -> None:
        """Fill every cell with an independent uniform byte from ``rng``."""
        if rng is None:
            rng = np.random.default_rng()
        buffer = self._buffers[self._current]
        buffer[:] = rng.integers(0, 256, size=buffer.size, dtype=np.uint8)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Cell ({x}, {y}) is outside the {self.width}x{self.height} board")
        return y * self.width + x

    def value(self, x: int, y: int) -> int:
        return int(self._buffers[self._current][self._index(x, y)])

    def set_value(self, x: int, y: int, value: int) -> None:
        index = self._index(x, y)
        if isinstance(value, bool) or int(value) != value or not 0 <= value <= ILLED:
            raise ValueError(f"Cell value must be an integer in [0, 255], got {value!r}")
        self._buffers[self._current][index] = value

    def neighborhood(self, x: int, y: int) -> Tuple[int, ...]:
        """Return the 8 wrapped neighbors in order NW, N, NE, W, E, SW, S, SE."""
        self._index(x, y)
        x1 = (x + self.width - 1) % self.width
        x2 = (x + 1) % self.width
        y1 = (y + self.height - 1) % self.height
        y2 = (y + 1) % self.height
        return (
            self.value(x1, y1), self.value(x, y1), self.value(x2, y1),
            self.value(x1, y), self.value(x2, y),
            self.value(x1, y2), self.value(x, y2), self.value(x2, y2),
        )

    def count_infected(self, x: int, y: int) -> int:
        return sum(1 for v in self.neighborhood(x, y) if HEALTHY < v < ILLED)

    def count_illed(self, x: int, y: int) -> int:
        return sum(1 for v in self.neighborhood(x, y) if v == ILLED)

    def sum(self, x: int, y: int) -> int:
        """Own value plus the values of all 8 neighbors."""
        return self.value(x, y) + sum(self.neighborhood(x, y))

    def iter_cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(x, y, value)`` in row-major order."""
        buffer = self._buffers[self._current]
        for index, value in enumerate(buffer):
            y, x = divmod(index, self.width)
            yield x, y, int(value)

    def step(self, params: RuleParameters) -> None:
        """Advance one generation; every new value derives from the old one."""
        scratch = 1 - self._current
        next_state(self.state,
                   params,
                   out=self._buffers[scratch].reshape(self.height, self.width))
        self._current = scratch
        self.generation += 1


def simulate(board: Board, params: RuleParameters, num_steps: int) -> np.ndarray:
    """Evolve a copy of ``board`` and return the trajectory (num_steps + 1, H, W)."""
    trajectory = np.zeros((num_steps + 1, board.height, board.width), dtype=np.uint8)
    trajectory[0] = board.state
    current = board.copy()
    for t in range(1, num_steps + 1):
        current.step(params)
        trajectory[t] = current.state
    return trajectory
