"""
Planner: expand (palette x one resolution) into the ordered artifacts to build.
Pure functions of their inputs; paths are deterministic so reruns find what earlier runs made.
"""
from collections.abc import Iterator, Sequence
from pathlib import Path

from .schema import Artifact, ArtifactKind, ArtifactSet, Color, Resolution

IMAGE_EXTENSION = "jpg"
VIDEO_EXTENSION = "mov"


def successor(palette: Sequence[Color], index: int) -> Color:
    """Next color in the cycle; the last color wraps to the first (a single color is its own successor)."""
    if not palette:
        raise IndexError("successor: palette is empty")
    return palette[(index + 1) % len(palette)]


def resolution_dir(output_dir: Path, resolution: Resolution) -> Path:
    return Path(output_dir) / resolution.label


def image_path(output_dir: Path, resolution: Resolution, color: Color) -> Path:
    return resolution_dir(output_dir, resolution) / f"{resolution.label}-{color.name}.{IMAGE_EXTENSION}"


def video_path(output_dir: Path, resolution: Resolution, color: Color) -> Path:
    return resolution_dir(output_dir, resolution) / f"{resolution.label}-{color.name}.{VIDEO_EXTENSION}"


def transition_path(output_dir: Path, resolution: Resolution, color: Color, next_color: Color) -> Path:
    name = f"{resolution.label}-{color.name}-to-{next_color.name}.{VIDEO_EXTENSION}"
    return resolution_dir(output_dir, resolution) / name


def plan_resolution(
    palette: Sequence[Color],
    resolution: Resolution,
    output_dir: Path,
) -> list[ArtifactSet]:
    """
    One ArtifactSet per palette color, in palette order.
    An empty palette plans nothing. Names are not validated here; that is the loader's job.
    """
    label = resolution.label
    plan: list[ArtifactSet] = []
    for index, color in enumerate(palette):
        nxt = successor(palette, index)
        image = image_path(output_dir, resolution, color)
        next_image = image_path(output_dir, resolution, nxt)
        video = video_path(output_dir, resolution, color)
        transition = transition_path(output_dir, resolution, color, nxt)
        plan.append(
            ArtifactSet(
                image=Artifact(
                    kind=ArtifactKind.IMAGE,
                    path=image,
                    description=f"creating {color.name} image with resolution of {label}",
                    resolution=resolution,
                    color=color,
                ),
                video=Artifact(
                    kind=ArtifactKind.VIDEO,
                    path=video,
                    description=f"creating {color.name} video with resolution of {label} from {image}",
                    resolution=resolution,
                    color=color,
                    dependencies=(image,),
                ),
                transition=Artifact(
                    kind=ArtifactKind.TRANSITION,
                    path=transition,
                    description=f"creating {transition.name} transition video with resolution of {label}",
                    resolution=resolution,
                    color=color,
                    next_color=nxt,
                    dependencies=(image, next_image),
                ),
            )
        )
    return plan


def iter_artifacts(
    palette: Sequence[Color],
    resolution: Resolution,
    output_dir: Path,
) -> Iterator[Artifact]:
    """Flattened plan: image, video, transition for each color in turn."""
    for artifact_set in plan_resolution(palette, resolution, output_dir):
        yield from artifact_set
