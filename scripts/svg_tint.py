#!/usr/bin/env python3
"""Tint SVG icons and export them as PDFs or Xcode image sets."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_tint.cache import CacheDirectory, CacheRootError
from svg_tint.export import TintPipeline, format_export_report
from svg_tint.palette import ColorPalette
from svg_tint.raster import RasterExporter
from svg_tint.settings import SettingsStore
from svg_tint.tint import TintPolicy, format_tint_report


def main() -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O error
        - 2: Configuration error
        - 3: Some items failed
    """
    parser = argparse.ArgumentParser(
        description="Tint SVG icons and export them as PDFs or Xcode image sets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Auto mode: tint colors come from the palette
  %(prog)s icons/ --output out/

  # Manual mode: one color for every icon
  %(prog)s icons/*.svg --output out/ --color "#FF0000"

  # Export Xcode image sets (source = light, tinted = dark)
  %(prog)s icons/ --output Assets.xcassets/ --imageset

  # Preview tint results without exporting
  %(prog)s icons/ --dry-run
""",
    )
    parser.add_argument("inputs", type=Path, nargs="+", help="SVG files or directories")
    parser.add_argument("--output", "-o", type=Path, help="Output directory")
    parser.add_argument("--color", "-c", type=str, help="Manual tint color (#RRGGBB)")
    parser.add_argument(
        "--imageset", action="store_true", help="Export .imageset bundles instead of flat PDFs"
    )
    parser.add_argument("--palette", "-p", type=Path, help="Color override JSON file")
    parser.add_argument("--settings", type=Path, help="Settings YAML file")
    parser.add_argument("--tool", type=str, help="Rasterizer path (overrides settings)")
    parser.add_argument(
        "--save-tool", action="store_true", help="Persist --tool in the settings file"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scan and tint without writing output",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.output is None and not args.dry_run:
        print("Error: --output is required unless --dry-run is given", file=sys.stderr)
        return 2

    # Load settings
    store = SettingsStore(args.settings)
    try:
        settings = store.load()
        if args.tool and args.save_tool:
            store.set_tool_path(args.tool)
    except (yaml.YAMLError, ValueError) as e:
        print(f"Error: Failed to parse settings file: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: Failed to write settings file: {e}", file=sys.stderr)
        return 1

    # Tint policy
    try:
        policy = TintPolicy.manual(args.color) if args.color else TintPolicy.auto()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    palette = ColorPalette.load(args.palette or settings.palette_file)
    pipeline = TintPipeline(
        palette,
        cache=CacheDirectory(settings.cache_dir),
        exporter=RasterExporter(tool_path=args.tool, settings=store),
    )

    missing = [p for p in args.inputs if not p.exists()]
    for path in missing:
        print(f"Error: Input not found: {path}", file=sys.stderr)
    if missing:
        return 1

    batch = pipeline.scan(args.inputs)
    if not batch.assets:
        print("Error: No readable SVG files found", file=sys.stderr)
        return 1

    try:
        tinted = pipeline.tint(batch, policy)
    except (CacheRootError, OSError) as e:
        print(f"Error: Cache directory unavailable: {e}", file=sys.stderr)
        return 1

    print(format_tint_report(tinted))

    if args.dry_run:
        return 3 if batch.failed_count or tinted.failed_count else 0

    shape = "imageset" if args.imageset else "flat"
    try:
        report = pipeline.export(tinted, args.output, shape=shape)
    except (CacheRootError, OSError) as e:
        print(f"Error: Failed to export: {e}", file=sys.stderr)
        return 1

    print()
    print(format_export_report(report))

    if report.has_errors or batch.failed_count or tinted.failed_count:
        return 3

    return 0


if __name__ == "__main__":
    sys.exit(main())
