"""Data models and constants for the perforated plate generator."""

from dataclasses import dataclass, field
from enum import Enum

# AIDEV-NOTE: Product constraints - the UI caps plate dimensions to 3 digits
MAX_PLATE_DIMENSION_MM = 999.0
SPACING_MIN_MM = 1.0
SPACING_MAX_MM = 50.0
SPACING_STEP_MM = 0.5
HOLE_SIZE_STEP_MM = 0.1

# Holes at or below this radius are not worth cutting
EMISSION_CUTOFF_MM = 0.1

# Wall-clock budget for one slice of pattern generation
CHUNK_BUDGET_MS = 12.0

# Quiet period before a config/image change starts a new generation
DEBOUNCE_MS = 300


class HoleShape(Enum):
    """Hole outline selector.

    AIDEV-NOTE: Only CIRCLE is rendered. SQUARE is reserved.
    """

    CIRCLE = "circle"
    SQUARE = "square"


class Language(Enum):
    """UI languages."""

    EN = "en"
    ZH = "zh"


class Theme(Enum):
    """UI color themes."""

    LIGHT = "light"
    DARK = "dark"


class RunState(Enum):
    """Pattern engine run states."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PlateConfig:
    """Physical plate and hole settings, all lengths in millimeters.

    Immutable for the duration of a generation run; use
    ``dataclasses.replace`` to derive a changed config.
    """

    width: float = 500.0  # mm
    height: float = 500.0  # mm
    spacing: float = 8.0  # mm, center-to-center pitch
    min_hole_size: float = 1.0  # mm diameter
    max_hole_size: float = 6.0  # mm diameter
    margin: float = 10.0  # mm border without holes

    # True = light areas get big holes, False = dark areas get big holes
    inverted: bool = False

    threshold: int = 128  # 0-255, reserved
    shape: HoleShape = HoleShape.CIRCLE

    @property
    def effective_width(self) -> float:
        """Width available for holes after subtracting both margins."""
        return max(0.0, self.width - 2 * self.margin)

    @property
    def effective_height(self) -> float:
        """Height available for holes after subtracting both margins."""
        return max(0.0, self.height - 2 * self.margin)

    @property
    def min_radius(self) -> float:
        return self.min_hole_size / 2

    @property
    def max_radius(self) -> float:
        return self.max_hole_size / 2


@dataclass(frozen=True)
class Grid:
    """Sampling grid derived from a PlateConfig."""

    cols: int
    rows: int
    pitch: float  # mm

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    @property
    def is_empty(self) -> bool:
        return self.cols == 0 or self.rows == 0


@dataclass(frozen=True)
class Dot:
    """A single circular hole.

    AIDEV-NOTE: x/y are the cell center in mm relative to the plate's
    top-left corner, r is the physical radius in mm.
    """

    x: float
    y: float
    r: float


@dataclass(frozen=True, order=True)
class GenerationToken:
    """Identifies one generation run. Later runs compare greater."""

    value: int = 0


@dataclass(frozen=True)
class DotSet:
    """Ordered holes produced by one generation run.

    Dots are in row-major order (all of row 0, then row 1, ...). A new run
    replaces the whole set; it is never mutated in place.
    """

    dots: "tuple[Dot, ...]" = ()
    token: GenerationToken = field(default_factory=GenerationToken)
    grid: Grid = field(default_factory=lambda: Grid(0, 0, 0.0))

    def __len__(self) -> int:
        return len(self.dots)

    def __iter__(self):
        return iter(self.dots)

    def __getitem__(self, index):
        return self.dots[index]

    @property
    def is_empty(self) -> bool:
        return not self.dots
