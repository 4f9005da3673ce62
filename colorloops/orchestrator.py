"""
Build orchestrator: for each planned artifact, skip it if the file exists, otherwise dispatch
its encoder command. Existence on disk is the only cache; nothing is hashed or timestamped.

Dependencies (the stills a video or transition is encoded from) are checked before the
dependent command runs:
- dry run: dependencies are never produced, so the check is waived and the command is printed;
- live: an artifact whose inputs are missing is deferred to the end of its resolution's pass
  (the transition from color i reads the still of color i+1, built later in the same pass).
  If the inputs are still missing then, it is reported as blocked and no command is issued.
"""
import logging
from collections.abc import Sequence
from pathlib import Path

from .commands import CommandBuilder
from .planner import iter_artifacts, resolution_dir
from .runner import CommandRunner
from .schema import Artifact, BuildResult, Color, Outcome, Resolution
from .storage import LocalStorage

logger = logging.getLogger(__name__)


class BuildOrchestrator:
    def __init__(
        self,
        runner: CommandRunner,
        commands: CommandBuilder | None = None,
        storage: LocalStorage | None = None,
    ):
        self.runner = runner
        self.commands = commands or CommandBuilder()
        self.storage = storage or LocalStorage()

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    def missing_dependencies(self, artifact: Artifact) -> list[Path]:
        return [p for p in artifact.dependencies if not self.storage.exists(p)]

    def build(self, artifact: Artifact, *, allow_defer: bool = False) -> BuildResult | None:
        """
        Skip or build one artifact. Returns None only when allow_defer is set and a
        dependency is missing in live mode; the caller is expected to come back later.
        """
        if self.storage.exists(artifact.path):
            logger.debug("skipping %s because it already exists", artifact.path)
            return BuildResult(artifact, Outcome.SKIPPED)

        missing = self.missing_dependencies(artifact)
        if missing:
            if self.dry_run:
                logger.debug("dry run: %s not present yet, still listing %s", ", ".join(map(str, missing)), artifact.path)
            elif allow_defer:
                logger.debug("deferring %s until %s exists", artifact.path, ", ".join(map(str, missing)))
                return None
            else:
                logger.warning("not creating %s: missing %s", artifact.path, ", ".join(map(str, missing)))
                return BuildResult(artifact, Outcome.BLOCKED)

        command = self.commands.for_artifact(artifact)
        logger.info("%s", artifact.description)
        if self.dry_run:
            self.runner.run(command)
            return BuildResult(artifact, Outcome.PLANNED, command)

        try:
            self.storage.ensure_dir(artifact.path.parent)
        except OSError as e:
            logger.warning("cannot create %s: %s", artifact.path.parent, e)
            return BuildResult(artifact, Outcome.FAILED, command)
        ok = self.runner.run(command)
        return BuildResult(artifact, Outcome.BUILT if ok else Outcome.FAILED, command)

    def build_resolution(
        self,
        palette: Sequence[Color],
        resolution: Resolution,
        output_dir: Path,
    ) -> list[BuildResult]:
        """Every artifact for one resolution, colors in palette order, deferred ones last."""
        if palette:
            logger.debug("resolution %s -> %s", resolution.label, resolution_dir(output_dir, resolution))
        results: list[BuildResult] = []
        deferred: list[Artifact] = []
        for artifact in iter_artifacts(palette, resolution, output_dir):
            result = self.build(artifact, allow_defer=True)
            if result is None:
                deferred.append(artifact)
            else:
                results.append(result)
        for artifact in deferred:
            results.append(self.build(artifact))
        return results
