"""Deterministic output naming for tinted artifacts."""

from typing import Iterable

from .document import ImageAsset


def suffix(size: int | None, color: str | None) -> str:
    """Build the variant suffix for a size and color.

    Args:
        size: Declared pixel size, if any.
        color: Normalized ``#rrggbb`` color, if any.

    Returns:
        Suffix string.

    Examples:
        >>> suffix(24, "#ffffff")
        '_24_ffffff'
        >>> suffix(None, "#ff0000")
        '_ff0000'
        >>> suffix(None, None)
        ''
    """
    parts = ""
    if size is not None:
        parts += f"_{size}"
    if color:
        parts += "_" + color.removeprefix("#")
    return parts


def output_base_name(asset: ImageAsset) -> str:
    """Output name (without extension) for an asset."""
    return asset.base_name + suffix(asset.declared_size, asset.fill_color)


def unique_output_names(
    assets: Iterable[ImageAsset],
    reserved: Iterable[str] = (),
) -> list[str]:
    """Assign collision-free output names in batch order.

    The first asset to claim a name keeps it; later assets computing the same
    name get ``_2``, ``_3``... appended. Names in ``reserved`` are treated as
    already taken.

    Args:
        assets: Assets in batch order.
        reserved: Names already used by another sequence in the same output.

    Returns:
        One name per asset, aligned with the input order.
    """
    taken = set(reserved)
    names: list[str] = []
    for asset in assets:
        base = output_base_name(asset)
        name = base
        index = 2
        while name in taken:
            name = f"{base}_{index}"
            index += 1
        taken.add(name)
        names.append(name)
    return names
