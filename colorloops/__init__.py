"""
colorloops: solid-color stills, looping videos and cross-fade transitions for every
palette color at every target resolution. Encoding is delegated to ImageMagick/ffmpeg.
"""
from .schema import Artifact, ArtifactKind, ArtifactSet, BuildResult, Color, Command, Outcome, Resolution
from .planner import plan_resolution, successor
from .pipeline import generate_matrix

__all__ = [
    "Artifact",
    "ArtifactKind",
    "ArtifactSet",
    "BuildResult",
    "Color",
    "Command",
    "Outcome",
    "Resolution",
    "generate_matrix",
    "plan_resolution",
    "successor",
]
