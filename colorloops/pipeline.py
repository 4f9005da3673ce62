"""
Pipeline: palette x resolutions -> every still, loop and transition under output_dir.
Strictly sequential: resolutions in order, then colors, then image/video/transition.
"""
from collections.abc import Sequence
from pathlib import Path

from .orchestrator import BuildOrchestrator
from .schema import BuildResult, Color, Resolution


def generate_matrix(
    palette: Sequence[Color],
    resolutions: Sequence[Resolution],
    output_dir: Path,
    *,
    orchestrator: BuildOrchestrator,
) -> list[BuildResult]:
    """
    Build (or skip) every artifact for every resolution. Returns the per-artifact results
    in dispatch order. Encoder failures are in the results; nothing here raises for them.
    """
    output_dir = Path(output_dir)
    results: list[BuildResult] = []
    for resolution in resolutions:
        results.extend(orchestrator.build_resolution(palette, resolution, output_dir))
    return results
