"""
Storage medium for build outputs. The only question asked of it is whether a path exists.
"""
from pathlib import Path


class LocalStorage:
    """Local filesystem."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def ensure_dir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
