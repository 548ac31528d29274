"""Export pipeline: scan -> tint -> cache -> rasterize -> output tree.

Two output shapes are supported:
- flat: sibling PDFs for every source and tinted variant
- imageset: one Xcode ``.imageset`` bundle per source, pairing the source PDF
  (default appearance) with its tinted PDF (dark appearance)

Each call returns a value describing its result; no batch state is kept
between calls.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal

from .cache import CacheDirectory
from .document import Batch, ImageAsset, ItemOutcome, collect_svg_files, scan_images
from .palette import ColorPalette
from .raster import RasterExporter
from .tint import TintedBatch, TintPolicy, tint_batch

logger = logging.getLogger(__name__)

ExportShape = Literal["flat", "imageset"]

PDF_EXTENSION = ".pdf"
IMAGESET_EXTENSION = ".imageset"
MANIFEST_FILE_NAME = "Contents.json"


@dataclass
class ExportReport:
    """Result of one export run."""

    target: Path
    shape: ExportShape
    outcomes: list[ItemOutcome] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if any item failed."""
        return any(o.status == "failed" for o in self.outcomes)

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "failed")


def build_imageset_manifest(light: str, dark: str | None) -> dict:
    """Build the Contents.json data for an image set.

    Args:
        light: File name of the default-appearance PDF.
        dark: File name of the dark-appearance PDF, or None for an empty slot.

    Returns:
        Manifest dictionary.
    """
    dark_entry: dict = {
        "appearances": [{"appearance": "luminosity", "value": "dark"}],
        "idiom": "universal",
    }
    if dark is not None:
        dark_entry["filename"] = dark

    return {
        "images": [
            {"filename": light, "idiom": "universal"},
            dark_entry,
        ],
        "info": {"author": "xcode", "version": 1},
        "properties": {"preserves-vector-representation": True},
    }


def write_imageset_manifest(directory: Path, light: str, dark: str | None) -> Path:
    """Write Contents.json into an image set directory.

    Returns:
        Path of the manifest file.
    """
    path = directory / MANIFEST_FILE_NAME
    with open(path, "w", encoding="utf-8") as f:
        json.dump(build_imageset_manifest(light, dark), f, indent=2)
        f.write("\n")
    return path


class TintPipeline:
    """Drives scan, tint and export for batches of SVG icons."""

    def __init__(
        self,
        palette: ColorPalette,
        cache: CacheDirectory | None = None,
        exporter: RasterExporter | None = None,
    ):
        self.palette = palette
        self.cache = cache if cache is not None else CacheDirectory()
        self.exporter = exporter if exporter is not None else RasterExporter()

    def scan(self, paths: Iterable[Path]) -> Batch:
        """Scan input files and directories into a source batch."""
        return scan_images(collect_svg_files(paths))

    def tint(self, batch: Batch, policy: TintPolicy, previews: bool = False) -> TintedBatch:
        """Tint a batch, purging cached artifacts from any previous run.

        Args:
            batch: Source batch.
            policy: Color selection policy.
            previews: Whether to render preview bitmaps.

        Returns:
            TintedBatch.
        """
        self.cache.purge()
        renderer = self.exporter.render_preview if previews else None
        return tint_batch(batch, policy, self.palette, render_preview=renderer)

    def _source_svg(self, asset: ImageAsset, name: str) -> Path:
        """Path of an SVG file holding the source asset's markup."""
        if asset.source_path is not None and asset.source_path.is_file():
            return asset.source_path
        return self.cache.write(asset.raw_markup, name)

    def _rasterize(self, svg_path: Path, pdf_path: Path, report: ExportReport) -> str | None:
        """Rasterize one file; return an error message on failure."""
        result = self.exporter.rasterize(svg_path, pdf_path)
        if not result.ok:
            return result.describe()
        report.written.append(pdf_path)
        return None

    def export_flat(self, tinted: TintedBatch, target: Path) -> ExportReport:
        """Export every source and tinted asset as sibling PDFs.

        Args:
            tinted: Tinted batch (carries its source batch).
            target: Output directory (created if needed).

        Returns:
            ExportReport with one outcome per PDF.

        Raises:
            OSError: If the target directory cannot be created.
        """
        target.mkdir(parents=True, exist_ok=True)
        report = ExportReport(target=target, shape="flat")
        self.cache.purge()
        logger.info("Writing temporary files to %s", self.cache.root)

        jobs: list[tuple[str, Path]] = []
        for asset, name in zip(tinted.source.assets, tinted.source_names()):
            try:
                jobs.append((name, self._source_svg(asset, name)))
            except OSError as e:
                logger.warning("Failed to cache SVG %s: %s", name, e)
                report.outcomes.append(ItemOutcome(name + PDF_EXTENSION, "failed", str(e)))

        for variant, name in zip(tinted.tinted, tinted.tinted_names()):
            if variant is None or name is None:
                continue
            try:
                jobs.append((name, self.cache.write(variant.raw_markup, name)))
            except OSError as e:
                logger.warning("Failed to cache SVG %s: %s", name, e)
                report.outcomes.append(ItemOutcome(name + PDF_EXTENSION, "failed", str(e)))

        for name, svg_path in jobs:
            pdf_name = name + PDF_EXTENSION
            error = self._rasterize(svg_path, target / pdf_name, report)
            if error:
                report.outcomes.append(ItemOutcome(pdf_name, "failed", error))
            else:
                report.outcomes.append(ItemOutcome(pdf_name, "success"))

        return report

    def export_imagesets(self, tinted: TintedBatch, target: Path) -> ExportReport:
        """Export one ``.imageset`` bundle per source asset.

        Args:
            tinted: Tinted batch (carries its source batch).
            target: Output directory (created if needed).

        Returns:
            ExportReport with one outcome per image set.

        Raises:
            OSError: If the target directory cannot be created.
        """
        target.mkdir(parents=True, exist_ok=True)
        report = ExportReport(target=target, shape="imageset")
        self.cache.purge()
        logger.info("Writing temporary files to %s", self.cache.root)

        for asset, variant, name, tinted_name in zip(
            tinted.source.assets,
            tinted.tinted,
            tinted.source_names(),
            tinted.tinted_names(),
        ):
            set_name = name + IMAGESET_EXTENSION
            set_dir = target / set_name
            try:
                set_dir.mkdir(exist_ok=True)
            except OSError as e:
                logger.warning("Failed to create image set %s: %s", set_dir, e)
                report.outcomes.append(ItemOutcome(set_name, "failed", str(e)))
                continue

            errors: list[str] = []
            try:
                error = self._rasterize(
                    self._source_svg(asset, name), set_dir / (name + PDF_EXTENSION), report
                )
                if error:
                    errors.append(error)
            except OSError as e:
                errors.append(str(e))

            dark_file = None
            if variant is not None and tinted_name is not None:
                dark_file = tinted_name + PDF_EXTENSION
                try:
                    svg_path = self.cache.write(variant.raw_markup, tinted_name)
                    error = self._rasterize(svg_path, set_dir / dark_file, report)
                    if error:
                        errors.append(error)
                except OSError as e:
                    errors.append(str(e))

            try:
                report.written.append(
                    write_imageset_manifest(set_dir, name + PDF_EXTENSION, dark_file)
                )
            except OSError as e:
                errors.append(f"manifest: {e}")

            if errors:
                for error in errors:
                    logger.warning("Image set %s: %s", set_name, error)
                report.outcomes.append(ItemOutcome(set_name, "failed", "; ".join(errors)))
            else:
                report.outcomes.append(ItemOutcome(set_name, "success"))

        return report

    def export(self, tinted: TintedBatch, target: Path, shape: ExportShape = "flat") -> ExportReport:
        """Export in the requested shape."""
        if shape == "imageset":
            return self.export_imagesets(tinted, target)
        return self.export_flat(tinted, target)


def format_export_report(report: ExportReport) -> str:
    """Format export results as text.

    Args:
        report: Export report.

    Returns:
        Formatted text.
    """
    lines: list[str] = []
    lines.append(f"Output: {report.target} ({report.shape})")
    lines.append("")

    for outcome in report.outcomes:
        if outcome.ok:
            lines.append(f"  [OK] {outcome.name}")
        else:
            lines.append(f"  [{outcome.status.upper()}] {outcome.name}: {outcome.message}")

    lines.append("")
    lines.append(f"Exported: {report.success_count}, Failed: {report.failed_count}")

    if report.has_errors:
        lines.append("")
        lines.append("*** ERRORS DETECTED - Some files were not exported ***")

    return "\n".join(lines)
