"""SVG fill tinting."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Literal
from xml.etree import ElementTree as ET

from .document import Batch, ImageAsset, ItemOutcome
from .naming import unique_output_names
from .palette import ColorPalette
from .utils import (
    FILL_ATTRIBUTE,
    iter_fill_elements,
    normalize_hex,
    parse_svg_text,
    serialize_svg,
)

logger = logging.getLogger(__name__)

TintMode = Literal["auto", "manual"]

# Renders SVG markup into preview bitmap bytes
PreviewRenderer = Callable[[str], bytes | None]


@dataclass(frozen=True)
class TintPolicy:
    """How the target color is chosen for each asset.

    In auto mode the color comes from the palette; in manual mode one color
    is applied to every asset.
    """

    mode: TintMode = "auto"
    color: str | None = None

    @classmethod
    def auto(cls) -> "TintPolicy":
        return cls(mode="auto")

    @classmethod
    def manual(cls, color: str) -> "TintPolicy":
        """Create a manual policy.

        Raises:
            ValueError: If the color is not a hex color.
        """
        normalized = normalize_hex(color)
        if normalized is None:
            raise ValueError(f"Invalid tint color: {color!r}")
        return cls(mode="manual", color=normalized)


@dataclass
class TintedBatch:
    """Tinted variants of a source batch.

    ``tinted`` is aligned with ``source.assets``; entries are None where no
    variant was produced.
    """

    source: Batch
    policy: TintPolicy
    tinted: list[ImageAsset | None] = field(default_factory=list)
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def assets(self) -> list[ImageAsset]:
        """Tinted assets in batch order."""
        return [t for t in self.tinted if t is not None]

    def source_names(self) -> list[str]:
        """Output names of the source assets."""
        return unique_output_names(self.source.assets)

    def tinted_names(self) -> list[str | None]:
        """Output names of the tinted assets, aligned with ``tinted``.

        Names never collide with source names.
        """
        names = iter(unique_output_names(self.assets, reserved=self.source_names()))
        return [next(names) if t is not None else None for t in self.tinted]

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "skipped")

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "failed")


def tint_markup(markup: str, color: str) -> str:
    """Rewrite every fill target in SVG markup to one color.

    The root ``svg`` element's own fill is left untouched. Markup outside
    the ``svg`` element (XML declaration, doctype) is not preserved.

    Args:
        markup: SVG document text.
        color: Target color in any hex notation.

    Returns:
        Serialized tinted SVG.

    Raises:
        ValueError: If color is not a hex color or the root is not ``svg``.
        ET.ParseError: If the markup is not well-formed.
    """
    normalized = normalize_hex(color)
    if normalized is None:
        raise ValueError(f"Invalid tint color: {color!r}")

    root = parse_svg_text(markup)
    for elem in iter_fill_elements(root):
        elem.set(FILL_ATTRIBUTE, normalized)
    return serialize_svg(root)


def tint_asset(
    asset: ImageAsset,
    color: str,
    render_preview: PreviewRenderer | None = None,
) -> ImageAsset:
    """Produce a tinted variant of an asset.

    Args:
        asset: Source asset (not modified).
        color: Target color.
        render_preview: Optional callable producing a preview bitmap.

    Returns:
        New ImageAsset with the same base name and size.
    """
    normalized = normalize_hex(color)
    if normalized is None:
        raise ValueError(f"Invalid tint color: {color!r}")

    markup = tint_markup(asset.raw_markup, normalized)
    preview = render_preview(markup) if render_preview is not None else None
    return asset.derive(raw_markup=markup, fill_color=normalized, rendered_preview=preview)


def choose_color(
    asset: ImageAsset, policy: TintPolicy, palette: ColorPalette
) -> tuple[str | None, str]:
    """Pick the target color for an asset.

    Returns:
        Tuple of (color or None, reason when None).
    """
    if policy.mode == "manual":
        return policy.color, "" if policy.color else "no manual color given"

    if asset.fill_color is None:
        return None, "no fill color"
    color = palette.resolve(asset.fill_color)
    if color is None:
        return None, f"no palette entry for {asset.fill_color}"
    return color, ""


def tint_batch(
    batch: Batch,
    policy: TintPolicy,
    palette: ColorPalette,
    render_preview: PreviewRenderer | None = None,
) -> TintedBatch:
    """Tint every asset in a batch.

    Args:
        batch: Scanned source batch.
        policy: Color selection policy.
        palette: Palette used in auto mode.
        render_preview: Optional preview renderer.

    Returns:
        TintedBatch with one outcome per source asset.
    """
    result = TintedBatch(source=batch, policy=policy)

    for asset in batch.assets:
        color, reason = choose_color(asset, policy, palette)
        if color is None:
            logger.info("Skipping %s: %s", asset.base_name, reason)
            result.tinted.append(None)
            result.outcomes.append(ItemOutcome(asset.base_name, "skipped", reason))
            continue

        try:
            tinted = tint_asset(asset, color, render_preview)
        except (ET.ParseError, ValueError) as e:
            logger.warning("Failed to tint %s: %s", asset.base_name, e)
            result.tinted.append(None)
            result.outcomes.append(ItemOutcome(asset.base_name, "failed", str(e)))
            continue

        result.tinted.append(tinted)
        result.outcomes.append(ItemOutcome(asset.base_name, "success", tinted.fill_color or ""))

    return result


def format_tint_report(tinted: TintedBatch) -> str:
    """Format tint results as text.

    Args:
        tinted: Tinted batch.

    Returns:
        Formatted text.
    """
    lines: list[str] = []
    mode = tinted.policy.mode
    if tinted.policy.color:
        mode += f" ({tinted.policy.color})"
    lines.append(f"Tint mode: {mode}")
    lines.append("")

    names = tinted.tinted_names()
    for asset, variant, name, outcome in zip(
        tinted.source.assets, tinted.tinted, names, tinted.outcomes
    ):
        source_color = asset.fill_color or "(none)"
        if variant is not None:
            lines.append(f"  {asset.base_name}: {source_color} -> {variant.fill_color} [{name}]")
        else:
            lines.append(f"  [{outcome.status.upper()}] {asset.base_name}: {outcome.message}")

    lines.append("")
    lines.append(
        f"Tinted: {len(tinted.assets)}, "
        f"Skipped: {tinted.skipped_count}, "
        f"Failed: {tinted.failed_count}"
    )
    return "\n".join(lines)
