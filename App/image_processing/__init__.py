"""Image to perforation pattern pipeline.

AIDEV-NOTE: This package handles the complete pipeline from a decoded image
to an ordered set of plate holes. Organized into modular components:
- grid: Grid planning from plate dimensions
- sampling: Image decoding and per-cell luminance
- radius: Luminance to hole radius mapping
- engine: Chunked, cancellable PatternEngine orchestrator
- svg_export: Millimeter-accurate SVG output
- utils: Plate statistics
"""

from .engine import CooperativeScheduler, PatternEngine, PatternRun, generate_dot_set
from .grid import plan_grid
from .radius import map_radius
from .sampling import as_image, load_image, sample_luminance
from .svg_export import dots_to_svg, export_filename, export_svg, write_svg

__all__ = [
    "CooperativeScheduler",
    "PatternEngine",
    "PatternRun",
    "generate_dot_set",
    "plan_grid",
    "map_radius",
    "as_image",
    "load_image",
    "sample_luminance",
    "dots_to_svg",
    "export_filename",
    "export_svg",
    "write_svg",
]
