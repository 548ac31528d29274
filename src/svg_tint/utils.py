"""Utility functions for SVG parsing and serialization."""

import re
from typing import Iterator
from xml.etree import ElementTree as ET

# SVG namespace mappings
SVG_NAMESPACES = {
    "svg": "http://www.w3.org/2000/svg",
    "inkscape": "http://www.inkscape.org/namespaces/inkscape",
    "sodipodi": "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "xlink": "http://www.w3.org/1999/xlink",
}

FILL_ATTRIBUTE = "fill"

_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_LENGTH_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:px)?\s*$")


def register_namespaces() -> None:
    """Register SVG namespaces to preserve prefixes when writing.

    The SVG namespace itself is registered as the default namespace so that
    serialized documents keep plain ``<svg>``/``<path>`` tags.

    Note:
        ElementTree keeps one namespace map per process, so after this call
        any other ElementTree user in the process also writes SVG elements
        without a prefix.
    """
    for prefix, uri in SVG_NAMESPACES.items():
        ET.register_namespace("" if prefix == "svg" else prefix, uri)


def parse_svg_text(markup: str) -> ET.Element:
    """Parse SVG markup and return the root element.

    Args:
        markup: SVG document text.

    Returns:
        Root element of the parsed SVG.

    Raises:
        ET.ParseError: If the text is not well-formed XML.
        ValueError: If the root element is not ``svg``.
    """
    register_namespaces()
    root = ET.fromstring(markup)
    if get_local_name(root.tag) != "svg":
        raise ValueError(f"Root element is <{get_local_name(root.tag)}>, not <svg>")
    return root


def serialize_svg(root: ET.Element) -> str:
    """Serialize an SVG root element back to markup."""
    register_namespaces()
    return ET.tostring(root, encoding="unicode")


def get_local_name(tag: str) -> str:
    """Extract local name from a namespaced tag.

    Args:
        tag: Full tag name, possibly with namespace.

    Returns:
        Local name without namespace prefix.

    Example:
        >>> get_local_name("{http://www.w3.org/2000/svg}path")
        'path'
    """
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def is_fill_target(element: ET.Element) -> bool:
    """Check if an element's fill should be tinted.

    Any element carrying a ``fill`` attribute qualifies, except the root
    ``svg`` element.

    Args:
        element: An XML element.

    Returns:
        True if the element is a fill target.
    """
    if not isinstance(element.tag, str):
        # Comments and processing instructions
        return False
    if get_local_name(element.tag) == "svg":
        return False
    return element.get(FILL_ATTRIBUTE) is not None


def iter_fill_elements(root: ET.Element) -> Iterator[ET.Element]:
    """Iterate over fill target elements in document order.

    Args:
        root: Root SVG element.

    Yields:
        Each element for which is_fill_target() is true.
    """
    for elem in root.iter():
        if is_fill_target(elem):
            yield elem


def normalize_hex(value: str | None) -> str | None:
    """Normalize a hex color to lower-case ``#rrggbb``.

    Args:
        value: Color string such as ``#ABCDEF``, ``abcdef`` or ``#abc``.

    Returns:
        Normalized color, or None if the value is not a hex color.

    Examples:
        >>> normalize_hex("#ABCDEF")
        '#abcdef'
        >>> normalize_hex("F0a")
        '#ff00aa'
        >>> normalize_hex("none") is None
        True
    """
    if value is None:
        return None
    match = _HEX_COLOR_RE.match(value.strip())
    if match is None:
        return None
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def parse_declared_size(value: str | None) -> int | None:
    """Parse a root ``width`` attribute into an integer pixel size.

    Args:
        value: Attribute value (``"24"``, ``"24px"``, ``"24.0"``).

    Returns:
        Integer size, or None if absent or not a plain pixel length.
    """
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if match is None:
        return None
    return int(float(match.group(1)))
