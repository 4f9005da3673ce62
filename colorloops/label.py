"""
Solid-color label image with Pillow: a drop-in for `convert -size WxH -gravity center label:...`
when ImageMagick is not installed. Runs as its own process by file path (python label.py ...),
so it needs no package import and the orchestrator treats it like any other external encoder.
"""
import argparse
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont


def parse_size(size: str) -> tuple[int, int]:
    """'1920x1080' -> (1920, 1080)."""
    try:
        w, h = size.lower().split("x", 1)
        width, height = int(w), int(h)
    except ValueError as e:
        raise ValueError(f"Invalid size {size!r}; expected WIDTHxHEIGHT") from e
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid size {size!r}; dimensions must be positive")
    return width, height


def _load_font(font: str, pointsize: int):
    candidates = [font, f"{font.lower()}.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"]
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, pointsize)
        except OSError:
            continue
    return ImageFont.load_default()


def render_label(
    output_path: Path,
    width: int,
    height: int,
    *,
    background: str,
    text: str,
    fill: str = "white",
    font: str = "Arial",
    pointsize: int = 72,
) -> Path:
    """Fill width x height with background and draw text centered. Format follows the suffix."""
    image = Image.new("RGB", (width, height), background)
    if text:
        draw = ImageDraw.Draw(image)
        face = _load_font(font, pointsize)
        left, top, right, bottom = draw.textbbox((0, 0), text, font=face)
        x = (width - (right - left)) // 2 - left
        y = (height - (bottom - top)) // 2 - top
        draw.text((x, y), text, font=face, fill=fill)
    output_path = Path(output_path)
    image.save(output_path)
    return output_path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render a solid-color image with a centered text label.")
    parser.add_argument("output", type=Path, help="Output image path (e.g. 1920x1080-red.jpg).")
    parser.add_argument("--size", required=True, help="WIDTHxHEIGHT, e.g. 1920x1080.")
    parser.add_argument("--background", required=True, help="Fill color, e.g. '#FF0000'.")
    parser.add_argument("--text", default="", help="Label drawn at the center.")
    parser.add_argument("--fill", default="white", help="Text color (default: white).")
    parser.add_argument("--font", default="Arial", help="Font name or .ttf path (default: Arial).")
    parser.add_argument("--pointsize", type=int, default=72, help="Font size (default: 72).")
    args = parser.parse_args(argv)

    try:
        width, height = parse_size(args.size)
    except ValueError as e:
        parser.error(str(e))
    render_label(
        args.output,
        width,
        height,
        background=args.background,
        text=args.text,
        fill=args.fill,
        font=args.font,
        pointsize=args.pointsize,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
