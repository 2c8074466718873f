"""Version patching module - bumps the version field of package files."""

import asyncio
import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from versionpatch.core.incrementer import VersionIncrementer
from versionpatch.errors import ParseError, StateError, VersionError, VersionFileError
from versionpatch.logging_utils import get_logger
from versionpatch.models import PatchConfig

logger = get_logger(__name__)

HOOK_NAME = "versionpatch"

EmitCallback = Callable[[Optional[BaseException]], None]


class EmitHost(Protocol):
    """A build tool exposing an output emission hook."""

    def tap_emit(self, name: str, hook: Callable[..., None]) -> None: ...


@dataclass
class FileBump:
    """A version file that was rewritten."""

    path: Path
    old_version: str
    new_version: str


@dataclass
class FileFailure:
    """A version file that could not be patched."""

    path: Path
    error: VersionError


@dataclass
class PatchResult:
    """Result of a version patching run."""

    skipped: bool = False
    new_version: Optional[str] = None
    bumped: list[FileBump] = field(default_factory=list)
    failed: list[FileFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed


class VersionPatcher:
    """Bumps the version of one or more package.json-like files."""

    def __init__(
        self,
        config: Optional[PatchConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        **options: Any,
    ) -> None:
        self.config = config or PatchConfig(**options)
        self.incrementer = VersionIncrementer()
        self.new_version: Optional[str] = None
        self.last_result: Optional[PatchResult] = None
        self._clock = clock
        self._last_run: Optional[float] = None

    @property
    def files(self) -> list[Path]:
        """Absolute paths of the files to patch."""
        return [self._resolve(f) for f in self.config.active_files]

    def _resolve(self, file: str) -> Path:
        path = Path(file).expanduser()
        if path.is_absolute():
            return path
        return Path(self.config.base_path) / path

    def bump_file(self, path: Path) -> FileBump:
        """Bump the version field of a single file and write it back.

        Nothing is written when reading, parsing or incrementing fails.
        """
        type_name = self.config.type.value
        try:
            content = self._read(path)
            data = self._decode(path, content)
            old_version = data.get("version") if isinstance(data, dict) else None
            if not isinstance(old_version, str):
                raise ParseError("No version string found", path=path)

            new_version = self.incrementer.increment(
                old_version, self.config.type, self.config.version
            )
            data["version"] = new_version

            output = json.dumps(data, indent=2, ensure_ascii=False)
            if content.endswith("\n"):
                output += "\n"
            self._write(path, output)
        except VersionError as e:
            raise type(e)(
                f"Failed to increase {type_name} version number: {e.message}",
                path=path,
            ) from e

        logger.info("Bumped %s: %s -> %s", path, old_version, new_version)
        return FileBump(path=path, old_version=old_version, new_version=new_version)

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise VersionFileError(f"File is not valid UTF-8: {e.reason}", path=path) from e
        except OSError as e:
            raise VersionFileError(f"Cannot read file: {e.strerror or e}", path=path) from e

    def _decode(self, path: Path, content: str) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise VersionFileError(f"Invalid JSON: {e}", path=path) from e

    def _write(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise VersionFileError(f"Cannot write file: {e.strerror or e}", path=path) from e

    def update_version(self) -> PatchResult:
        """Bump every configured file unless the cooldown is active.

        Each file is attempted even if another fails; the first failure is
        raised afterwards and the cooldown is not restarted. The per-file
        outcome is kept in last_result.
        """
        if self.is_cooldown_active():
            logger.debug("Cooldown active, skipping version update")
            return PatchResult(skipped=True, new_version=self.new_version)

        result = PatchResult()
        for path in self.files:
            logger.debug("Patching %s", path)
            try:
                bump = self.bump_file(path)
            except VersionError as e:
                logger.warning("%s", e)
                result.failed.append(FileFailure(path=path, error=e))
                continue
            result.bumped.append(bump)
            self.new_version = bump.new_version

        result.new_version = self.new_version
        self.last_result = result

        if result.failed:
            raise result.failed[0].error

        if result.bumped:
            self._last_run = self._clock()
        return result

    def get_new_version(self) -> str:
        """Return the version written by the last run."""
        if self.new_version is None:
            raise StateError("Version is not changed yet.")
        return self.new_version

    def is_cooldown_active(self) -> bool:
        """True while the cooldown since the last successful run is running."""
        if self.config.cooldown <= 0 or self._last_run is None:
            return False
        elapsed_ms = (self._clock() - self._last_run) * 1000
        return elapsed_ms < self.config.cooldown

    def apply(self, host: EmitHost) -> None:
        """Register the emit hook on a build host when there is work to do."""
        if self.config.active_files:
            host.tap_emit(HOOK_NAME, self.handle_emit)

    def handle_emit(self, compilation: Any = None, callback: Optional[EmitCallback] = None) -> None:
        """Emit hook: bump versions, then report completion through callback."""
        error: Optional[BaseException] = None
        try:
            self.update_version()
        except Exception as e:
            error = e
            if callback is None:
                raise
        if callback is not None:
            callback(error)

    async def emit(self) -> PatchResult:
        """Awaitable emit hook that resolves once the files are written."""
        return await asyncio.to_thread(self.update_version)
