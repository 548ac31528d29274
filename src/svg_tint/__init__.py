"""SVG Tint - Recolor SVG icons and export them as PDFs or Xcode image sets."""

__version__ = "0.1.0"

from .cache import CacheDirectory, CacheRootError
from .document import (
    Batch,
    ImageAsset,
    ItemOutcome,
    collect_svg_files,
    scan_images,
)
from .export import (
    ExportReport,
    TintPipeline,
    build_imageset_manifest,
    format_export_report,
    write_imageset_manifest,
)
from .naming import output_base_name, suffix, unique_output_names
from .palette import DEFAULT_COLORS, ColorPalette, load_overrides
from .raster import CommandResult, RasterExporter, RasterizeError
from .settings import Settings, SettingsStore
from .tint import (
    TintedBatch,
    TintPolicy,
    format_tint_report,
    tint_asset,
    tint_batch,
    tint_markup,
)

__all__ = [
    # Document
    "Batch",
    "ImageAsset",
    "ItemOutcome",
    "collect_svg_files",
    "scan_images",
    # Palette
    "DEFAULT_COLORS",
    "ColorPalette",
    "load_overrides",
    # Tint
    "TintedBatch",
    "TintPolicy",
    "format_tint_report",
    "tint_asset",
    "tint_batch",
    "tint_markup",
    # Naming
    "output_base_name",
    "suffix",
    "unique_output_names",
    # Cache and rasterizer
    "CacheDirectory",
    "CacheRootError",
    "CommandResult",
    "RasterExporter",
    "RasterizeError",
    # Settings
    "Settings",
    "SettingsStore",
    # Export (pipeline)
    "ExportReport",
    "TintPipeline",
    "build_imageset_manifest",
    "format_export_report",
    "write_imageset_manifest",
]
