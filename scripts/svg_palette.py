#!/usr/bin/env python3
"""Show the resolved color palette and the tint each SVG would receive."""

import argparse
import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_tint.document import Batch, collect_svg_files, describe_asset, scan_images
from svg_tint.palette import ColorPalette


def format_table(palette: ColorPalette, batch: Batch) -> str:
    """Format palette and asset colors as a text table.

    Args:
        palette: Resolved palette.
        batch: Scanned assets (may be empty).

    Returns:
        Formatted table string.
    """
    lines = []
    lines.append(f"Palette: {palette.path}")
    lines.append("")

    rows: list[tuple[str, str, str]] = [("Source", "Tint", "")]
    rows.append(("-" * 10, "-" * 10, ""))
    for src, dst in palette.to_dict().items():
        rows.append((src, dst, ""))

    if batch.assets:
        rows.append(("", "", ""))
        rows.append(("File", "Fill", "Tint"))
        rows.append(("-" * 10, "-" * 10, "-" * 10))
        for asset in batch.assets:
            size = f" ({asset.declared_size}px)" if asset.declared_size is not None else ""
            rows.append(
                (
                    asset.base_name + size,
                    asset.fill_color or "(none)",
                    palette.resolve(asset.fill_color) or "(skip)",
                )
            )

    col_widths = [max(len(row[i]) for row in rows) for i in range(3)]
    for row in rows:
        line = f"{row[0]:<{col_widths[0]}}  {row[1]:<{col_widths[1]}}  {row[2]}"
        lines.append(line.rstrip())

    for outcome in batch.outcomes:
        if not outcome.ok:
            lines.append(f"[ERROR] {outcome.name}: {outcome.message}")

    return "\n".join(lines)


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    parser = argparse.ArgumentParser(
        description="Show the resolved color palette and the tint each SVG would receive."
    )
    parser.add_argument("inputs", type=Path, nargs="*", help="SVG files or directories")
    parser.add_argument("--palette", "-p", type=Path, help="Color override JSON file")
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    args = parser.parse_args()

    palette = ColorPalette.load(args.palette)
    batch = scan_images(collect_svg_files(args.inputs))

    if args.format == "json":
        data = {
            "palette": palette.to_dict(),
            "assets": [
                dict(describe_asset(a), tint=palette.resolve(a.fill_color))
                for a in batch.assets
            ],
        }
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        print(format_table(palette, batch))

    return 1 if batch.failed_count else 0


if __name__ == "__main__":
    sys.exit(main())
