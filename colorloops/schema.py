"""
Value types: palette colors, resolutions, planned artifacts and encoder commands.
All frozen; built once from config or computed on demand by the planner.
"""
import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class Color:
    """One palette entry. Order within the palette defines transition adjacency."""
    name: str
    hex: str


@dataclass(frozen=True)
class Resolution:
    width: int
    height: int

    @property
    def label(self) -> str:
        """WIDTHxHEIGHT, used as directory and filename component."""
        return f"{self.width}x{self.height}"


class ArtifactKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    TRANSITION = "transition"


@dataclass(frozen=True)
class Artifact:
    """A single file the build should produce."""
    kind: ArtifactKind
    path: Path
    description: str
    resolution: Resolution
    color: Color
    next_color: Color | None = None
    dependencies: tuple[Path, ...] = ()


@dataclass(frozen=True)
class ArtifactSet:
    """The image / video / transition triple for one (resolution, color) pair."""
    image: Artifact
    video: Artifact
    transition: Artifact

    def __iter__(self):
        # build order: the image is an input of the other two
        return iter((self.image, self.video, self.transition))


@dataclass(frozen=True)
class Command:
    """An external tool invocation as an argument vector (never run through a shell)."""
    argv: tuple[str, ...]

    @property
    def program(self) -> str:
        return self.argv[0] if self.argv else ""

    def __str__(self) -> str:
        return shlex.join(self.argv)


class Outcome(str, Enum):
    SKIPPED = "skipped"    # target already on disk
    PLANNED = "planned"    # dry run
    BUILT = "built"
    FAILED = "failed"      # encoder could not start or exited non-zero
    BLOCKED = "blocked"    # a dependency never appeared


@dataclass(frozen=True)
class BuildResult:
    artifact: Artifact
    outcome: Outcome
    command: Command | None = field(default=None)
