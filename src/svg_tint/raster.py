"""External SVG rasterizer (rsvg-convert) invocation."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

import yaml

from .settings import DEFAULT_TOOL_PATH, SettingsStore

logger = logging.getLogger(__name__)

# Output resolution passed to the rasterizer (points per inch)
RASTER_DPI = 72


class RasterizeError(RuntimeError):
    """The rasterizer could not be run or exited with an error."""

    def __init__(self, result: "CommandResult"):
        self.result = result
        super().__init__(result.describe())


@dataclass
class CommandResult:
    """Outcome of one rasterizer invocation."""

    args: list[str]
    returncode: int | None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the tool ran and exited with status 0."""
        return self.error is None and self.returncode == 0

    def describe(self) -> str:
        """One-line description for logs and reports."""
        if self.error is not None:
            return f"failed to run {self.args[0]}: {self.error}"
        if self.returncode != 0:
            detail = self.stderr.strip() or self.stdout.strip()
            message = f"{self.args[0]} exited with status {self.returncode}"
            return f"{message}: {detail}" if detail else message
        return "ok"

    def check(self) -> "CommandResult":
        """Raise RasterizeError unless the command succeeded."""
        if not self.ok:
            raise RasterizeError(self)
        return self


class RasterExporter:
    """Converts SVG files to PDF with an external command-line tool.

    The tool path is resolved on every call: an explicit ``tool_path`` wins,
    otherwise the settings store is re-read, otherwise the default install
    location is used.
    """

    def __init__(
        self,
        tool_path: str | None = None,
        settings: SettingsStore | None = None,
        timeout: float | None = None,
    ):
        self._tool_path = tool_path
        self.settings = settings
        self.timeout = timeout

    @property
    def tool_path(self) -> str:
        """Rasterizer path; an unreadable settings file yields the default."""
        if self._tool_path:
            return self._tool_path
        if self.settings is not None:
            try:
                return self.settings.tool_path
            except (yaml.YAMLError, ValueError, OSError) as e:
                logger.warning(
                    "Failed to read settings %s, using %s: %s",
                    self.settings.path,
                    DEFAULT_TOOL_PATH,
                    e,
                )
        return DEFAULT_TOOL_PATH

    def build_command(self, svg_path: Path, pdf_path: Path) -> list[str]:
        """Build the argument list for one SVG -> PDF conversion."""
        return [
            self.tool_path,
            "-d", str(RASTER_DPI),
            "-p", str(RASTER_DPI),
            "-f", "pdf",
            "-o", str(pdf_path),
            str(svg_path),
        ]

    def rasterize(self, svg_path: Path, pdf_path: Path) -> CommandResult:
        """Convert one SVG file into a PDF file.

        Never raises for tool failures; inspect the returned result.

        Args:
            svg_path: Input SVG file.
            pdf_path: Output PDF file.

        Returns:
            CommandResult with exit status and captured output.
        """
        args = self.build_command(svg_path, pdf_path)
        logger.debug("Running: %s", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            result = CommandResult(args=args, returncode=None, error=str(e))
            logger.warning("Rasterizer %s", result.describe())
            return result

        result = CommandResult(
            args=args,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
        if result.stdout.strip():
            logger.info("%s", result.stdout.strip())
        if not result.ok:
            logger.warning("Rasterizer %s", result.describe())
        return result

    def render_preview(self, markup: str) -> bytes | None:
        """Render SVG markup to PNG bytes for previews.

        Args:
            markup: SVG text, passed on stdin.

        Returns:
            PNG bytes, or None if the tool failed.
        """
        args = [self.tool_path, "-f", "png"]
        try:
            completed = subprocess.run(
                args,
                input=markup.encode("utf-8"),
                capture_output=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Preview rendering failed: %s", e)
            return None
        if completed.returncode != 0 or not completed.stdout:
            logger.warning(
                "Preview rendering failed: %s exited with status %d",
                args[0],
                completed.returncode,
            )
            return None
        return completed.stdout
