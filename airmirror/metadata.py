"""Parsing and display of DMAP "now playing" metadata sent by clients."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

_log = logging.getLogger(__name__)

HEADER_SIZE = 8
LISTING_ITEM_TAG = "mlit"
BANNER = "==============Audio Metadata============="

_STRING_TAGS = {
    "asaa": "Album artist",
    "asal": "Album",
    "asar": "Artist",
    "ascm": "Comment",
    "ascn": "Content description",
    "ascp": "Composer",
    "asct": "Category",
    "assa": "Sort Artist",
    "assc": "Sort Composer",
    "assl": "Sort Album artist",
    "assn": "Sort Name",
    "asss": "Sort Series",
    "assu": "Sort Album",
    "asdt": "Description",
    "asfm": "Format",
    "asgn": "Genre",
    "asky": "Keywords",
    "aslc": "Long Content Description",
    "minm": "Title",
}


class DmapError(ValueError):
    """The metadata buffer is not a well-formed DMAP listing item."""


@dataclass(frozen=True)
class DmapItem:
    """One tagged item of a DMAP listing."""

    tag: str
    data: bytes

    @property
    def label(self) -> str | None:
        """Human-readable name of the tag if it holds a string, else None."""
        return describe_tag(self.tag)


def _is_ascii_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def parse_dmap_header(data: bytes) -> tuple[str, int]:
    """Read the 8-byte header (4-letter tag, 32-bit big-endian length)."""
    if len(data) < HEADER_SIZE:
        raise DmapError(f"DMAP header needs {HEADER_SIZE} bytes, got {len(data)}")
    tag = data[:4].decode("latin-1")
    length = int.from_bytes(data[4:8], "big", signed=True)
    if not all(_is_ascii_alpha(char) for char in tag) or length < 0:
        raise DmapError(f"invalid DMAP header: tag [{tag}] datalen {length}")
    return tag, length


def describe_tag(tag: str) -> str | None:
    """Return the label of a string-valued DMAP tag, or None for other tags."""
    return _STRING_TAGS.get(tag)


def iter_listing_items(buffer: bytes) -> Iterator[DmapItem]:
    """Yield the items of a DMAP ``mlit`` listing item.

    Raises DmapError if the outer header is invalid, an item header is
    invalid, or bytes are left over that do not form an item.
    """
    if len(buffer) < HEADER_SIZE:
        raise DmapError(f"received invalid metadata, length {len(buffer)} < {HEADER_SIZE}")
    tag, datalen = parse_dmap_header(buffer)
    remaining = len(buffer) - HEADER_SIZE
    if tag != LISTING_ITEM_TAG or datalen != remaining:
        raise DmapError(
            f"received metadata with tag {tag}, but is not a DMAP listingitem, "
            f"or datalen = {datalen} != buflen {remaining}"
        )
    position = HEADER_SIZE
    while remaining >= HEADER_SIZE:
        tag, datalen = parse_dmap_header(buffer[position:position + HEADER_SIZE])
        position += HEADER_SIZE
        remaining -= HEADER_SIZE
        yield DmapItem(tag, bytes(buffer[position:position + datalen]))
        position += datalen
        remaining -= datalen
    if remaining != 0:
        raise DmapError(f"{remaining} bytes of metadata were not processed")


def _hex_dump(data: bytes) -> str:
    lines = (
        "".join(f"{byte:02x} " for byte in data[start:start + 16])
        for start in range(0, len(data), 16)
    )
    return "\n".join(lines)


def _string_value(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def format_metadata(buffer: bytes, debug: bool = False) -> str:
    """Render a DMAP listing as the text shown on the console.

    String items appear as ``Label: value``; with ``debug`` every item is
    announced and other items are shown as a hex dump.
    """
    lines = [BANNER]
    for count, item in enumerate(iter_listing_items(buffer), start=1):
        if debug:
            lines.append(f"{count}: dmap_tag [{item.tag}], {len(item.data)}")
        if not item.data:
            continue
        label = item.label
        if label is not None:
            lines.append(f"{label}: {_string_value(item.data)}")
        elif debug:
            lines.append(_hex_dump(item.data))
        else:
            lines.append("")
    return "\n".join(lines) + "\n"