"""
Encoder command builders. Each artifact kind maps to one argument vector for an external tool:
ImageMagick (or the bundled Pillow renderer) for stills, ffmpeg for loops and cross-fades.
Builders are pure; running them is the runner's job.
"""
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import ConfigError
from .schema import Artifact, ArtifactKind, Color, Command, Resolution

IMAGE_TOOLS = ("imagemagick", "pillow")
# run by path so the child process does not need colorloops importable
LABEL_SCRIPT = Path(__file__).resolve().with_name("label.py")


@dataclass(frozen=True)
class EncoderSettings:
    image_tool: str = "imagemagick"
    convert_bin: str = "convert"
    font: str = "Arial"
    pointsize: int = 72
    text_color: str = "white"
    ffmpeg_bin: str = "ffmpeg"
    frame_rate: str = "1/10"
    codec: str = "libx264"
    pix_fmt: str = "yuv420p"
    transition_type: str = "diagbr"
    transition_duration: int = 10

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "EncoderSettings":
        """Flatten the image/video/transition sections of a loaded config."""
        image = config.get("image") or {}
        video = config.get("video") or {}
        transition = config.get("transition") or {}
        tool = str(image.get("tool", cls.image_tool)).lower()
        if tool not in IMAGE_TOOLS:
            raise ConfigError(f"Unknown image tool {tool!r} (expected one of {', '.join(IMAGE_TOOLS)})")
        try:
            return cls(
                image_tool=tool,
                convert_bin=str(image.get("convert_bin", cls.convert_bin)),
                font=str(image.get("font", cls.font)),
                pointsize=int(image.get("pointsize", cls.pointsize)),
                text_color=str(image.get("text_color", cls.text_color)),
                ffmpeg_bin=str(video.get("ffmpeg_bin", cls.ffmpeg_bin)),
                frame_rate=str(video.get("frame_rate", cls.frame_rate)),
                codec=str(video.get("codec", cls.codec)),
                pix_fmt=str(video.get("pix_fmt", cls.pix_fmt)),
                transition_type=str(transition.get("type", cls.transition_type)),
                transition_duration=int(transition.get("duration", cls.transition_duration)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid encoder setting: {e}") from e


def fill_color(color: Color) -> str:
    """Palette hex as a color argument; a leading # is added when missing."""
    return color.hex if color.hex.startswith("#") else f"#{color.hex}"


class CommandBuilder:
    """Turns planned artifacts into encoder invocations."""

    def __init__(self, settings: EncoderSettings | None = None):
        self.settings = settings or EncoderSettings()

    def image(self, resolution: Resolution, color: Color, output: Path) -> Command:
        """Solid fill at the resolution's size with the WxH label centered on it."""
        s = self.settings
        label = resolution.label
        if s.image_tool == "pillow":
            return Command((
                sys.executable, str(LABEL_SCRIPT),
                "--size", label,
                "--background", fill_color(color),
                "--fill", s.text_color,
                "--font", s.font,
                "--pointsize", str(s.pointsize),
                "--text", label,
                str(output),
            ))
        return Command((
            s.convert_bin,
            "-size", label,
            "-gravity", "center",
            "-background", fill_color(color),
            "-fill", s.text_color,
            "-font", s.font,
            "-pointsize", str(s.pointsize),
            f"label:{label}",
            str(output),
        ))

    def video(self, image: Path, output: Path) -> Command:
        """Single still encoded as a low frame rate H.264 loop."""
        s = self.settings
        return Command((
            s.ffmpeg_bin,
            "-r", s.frame_rate,
            "-i", str(image),
            "-c:v", s.codec,
            "-pix_fmt", s.pix_fmt,
            str(output),
        ))

    def transition(self, image: Path, next_image: Path, output: Path) -> Command:
        """Cross-fade between two stills over the full clip duration."""
        s = self.settings
        duration = str(s.transition_duration)
        return Command((
            s.ffmpeg_bin,
            "-loop", "1", "-t", duration, "-i", str(image),
            "-loop", "1", "-t", duration, "-i", str(next_image),
            "-filter_complex", f"[0][1]xfade=transition={s.transition_type}:duration={duration}",
            "-c:v", s.codec,
            "-pix_fmt", s.pix_fmt,
            str(output),
        ))

    def for_artifact(self, artifact: Artifact) -> Command:
        if artifact.kind is ArtifactKind.IMAGE:
            return self.image(artifact.resolution, artifact.color, artifact.path)
        if artifact.kind is ArtifactKind.VIDEO:
            return self.video(artifact.dependencies[0], artifact.path)
        if artifact.kind is ArtifactKind.TRANSITION:
            image, next_image = artifact.dependencies
            return self.transition(image, next_image, artifact.path)
        raise ValueError(f"Unknown artifact kind: {artifact.kind!r}")
