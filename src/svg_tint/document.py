"""SVG document model and batch scanning."""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, Literal
from xml.etree import ElementTree as ET

from .utils import (
    FILL_ATTRIBUTE,
    iter_fill_elements,
    normalize_hex,
    parse_declared_size,
    parse_svg_text,
)

logger = logging.getLogger(__name__)

SVG_EXTENSION = ".svg"

OutcomeStatus = Literal["success", "skipped", "failed"]


@dataclass
class ItemOutcome:
    """Result of processing a single batch item."""

    name: str
    status: OutcomeStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        """Check if the item was processed successfully."""
        return self.status == "success"


@dataclass
class ImageAsset:
    """A parsed SVG icon, either a scanned source or a tinted variant."""

    base_name: str
    raw_markup: str
    source_path: Path | None = None
    fill_color: str | None = None
    declared_size: int | None = None
    rendered_preview: bytes | None = None

    def derive(
        self,
        raw_markup: str,
        fill_color: str,
        rendered_preview: bytes | None = None,
    ) -> "ImageAsset":
        """Create a tinted variant sharing this asset's name and size.

        Args:
            raw_markup: Tinted SVG markup.
            fill_color: Normalized color applied to the variant.
            rendered_preview: Optional preview bitmap of the variant.

        Returns:
            New ImageAsset.
        """
        return replace(
            self,
            raw_markup=raw_markup,
            fill_color=fill_color,
            rendered_preview=rendered_preview,
        )


@dataclass
class Batch:
    """Ordered set of scanned source assets."""

    assets: list[ImageAsset] = field(default_factory=list)
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        """Number of inputs that could not be scanned."""
        return sum(1 for o in self.outcomes if o.status == "failed")

    def __len__(self) -> int:
        return len(self.assets)


def collect_svg_files(paths: Iterable[Path]) -> list[Path]:
    """Expand input paths into the SVG files they refer to.

    Directories contribute their direct ``.svg`` children; plain files are
    kept when they carry an ``.svg`` extension. Other files are ignored.

    Args:
        paths: Files and/or directories.

    Returns:
        List of SVG file paths (unsorted; scan_images() orders them).
    """
    files: list[Path] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            for child in path.iterdir():
                if child.is_file() and child.suffix.lower() == SVG_EXTENSION:
                    files.append(child)
        elif path.suffix.lower() == SVG_EXTENSION:
            files.append(path)
        else:
            logger.debug("Ignoring non-SVG input: %s", path)
    return files


def find_fill_color(root: ET.Element) -> str | None:
    """Return the first hex fill color among the fill target elements.

    Args:
        root: Root SVG element.

    Returns:
        Normalized color, or None if no fill target holds a hex color.
    """
    for elem in iter_fill_elements(root):
        color = normalize_hex(elem.get(FILL_ATTRIBUTE))
        if color is not None:
            return color
    return None


def parse_asset(markup: str, base_name: str, source_path: Path | None = None) -> ImageAsset:
    """Build an ImageAsset from SVG markup.

    Args:
        markup: SVG document text.
        base_name: Name used to derive output names.
        source_path: File the markup was read from, if any.

    Returns:
        Parsed ImageAsset.

    Raises:
        ET.ParseError: If the markup is not well-formed.
        ValueError: If the root element is not ``svg``.
    """
    root = parse_svg_text(markup)
    return ImageAsset(
        base_name=base_name,
        raw_markup=markup,
        source_path=source_path,
        fill_color=find_fill_color(root),
        declared_size=parse_declared_size(root.get("width")),
    )


def load_asset(path: Path) -> ImageAsset:
    """Read and parse an SVG file.

    Args:
        path: Path to the SVG file.

    Returns:
        Parsed ImageAsset named after the file stem.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not UTF-8.
        ET.ParseError: If the file is not valid XML.
        ValueError: If the root element is not ``svg``.
    """
    markup = path.read_bytes().decode("utf-8")
    return parse_asset(markup, base_name=path.stem, source_path=path)


def scan_images(paths: Iterable[Path]) -> Batch:
    """Scan SVG files into a batch of source assets.

    Inputs are ordered by file name before parsing so the batch order does
    not depend on filesystem enumeration. Files that cannot be read, decoded
    or parsed are dropped with a failed outcome.

    Parsing is strict XML: markup a browser would recover from (unclosed
    tags, HTML entities such as ``&nbsp;``) is reported as failed rather
    than repaired.

    Args:
        paths: SVG file paths.

    Returns:
        Batch with one outcome per input path.
    """
    batch = Batch()
    for path in sorted((Path(p) for p in paths), key=lambda p: p.name):
        try:
            asset = load_asset(path)
        except (OSError, UnicodeDecodeError, ET.ParseError, ValueError) as e:
            logger.warning("Failed to read SVG %s: %s", path, e)
            batch.outcomes.append(ItemOutcome(path.name, "failed", str(e)))
            continue

        if asset.fill_color is None:
            logger.info("No fill color found in %s", path.name)
        batch.assets.append(asset)
        batch.outcomes.append(ItemOutcome(path.name, "success"))

    return batch


def describe_asset(asset: ImageAsset) -> dict:
    """Summarize an asset for reports and JSON output."""
    return {
        "name": asset.base_name,
        "file": str(asset.source_path) if asset.source_path else None,
        "fill_color": asset.fill_color,
        "declared_size": asset.declared_size,
    }
