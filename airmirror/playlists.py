"""HLS playlist rewriting for the local media player."""

from __future__ import annotations

PLAYLIST_HEADER = "#EXTM3U\n"
CONDENSED_TAG = "#YT-EXT-CONDENSED-URL"
CHUNK_TAG = "#EXTINF:"
MEDIA_SUFFIX = "m3u8"


def _find(text: str, needle: str, start: int, what: str) -> int:
    position = text.find(needle, start)
    if position < 0:
        raise ValueError(f"malformed playlist: {what} not found")
    return position


def _quoted_attribute(text: str, name: str, start: int) -> tuple[str, int]:
    """Return the quoted value of ``name=`` at or after ``start`` and the index after it."""
    attr = _find(text, f"{name}=", start, name)
    opening = _find(text, '"', attr, f"value of {name}") + 1
    closing = _find(text, '"', opening, f"end of {name}")
    return text[opening:closing], closing


def expand_condensed_playlist(playlist: str) -> str:
    """Expand a media playlist in condensed-URL form into the full form.

    Playlists without the condensed-URL header are returned unchanged.
    In each chunk the prefix is replaced by the base URI and the
    slash-separated values that follow become ``/param/value`` pairs.
    """
    header = playlist.find(PLAYLIST_HEADER)
    if header < 0:
        raise ValueError("malformed playlist: #EXTM3U header not found")
    body = header + len(PLAYLIST_HEADER)
    if not playlist.startswith(CONDENSED_TAG, body):
        return playlist

    base_uri, position = _quoted_attribute(playlist, "BASE-URI", body)
    params_text, position = _quoted_attribute(playlist, "PARAMS", position)
    prefix, position = _quoted_attribute(playlist, "PREFIX", position)
    params = params_text.split(",") if params_text else []
    last = len(params) - 1

    chunk = playlist.find(CHUNK_TAG)
    if chunk < 0:
        return playlist

    pieces = [playlist[:chunk]]
    old = chunk
    while chunk >= 0:
        start = _find(playlist, prefix, chunk, "chunk prefix")
        pieces.append(playlist[old:start])
        pieces.append(base_uri)
        old = start + len(prefix)
        chunk = playlist.find(CHUNK_TAG, old)
        for index, param in enumerate(params):
            if index != last:
                end = _find(playlist, "/", old, "parameter separator")
            else:
                end = _find(playlist, "#EXT", old, "next playlist tag")
            pieces.append(f"/{param}/")
            pieces.append(playlist[old:end])
            old = end + 1 if index != last else end
    pieces.append(playlist[old:])
    return "".join(pieces)


def rewrite_master_playlist(master: str, uri_prefix: str, local_prefix: str) -> str:
    """Replace every occurrence of the client's URI prefix by the local one."""
    if not uri_prefix:
        raise ValueError("uri prefix must not be empty")
    return master.replace(uri_prefix, local_prefix)


def media_uris(uri_prefix: str, master: str) -> list[str]:
    """List the media playlist URIs named in a master playlist.

    Each URI runs from an occurrence of ``uri_prefix`` to the next
    ``m3u8``. Raises ValueError if the prefix does not occur or a URI
    has no ``m3u8`` ending.
    """
    if not uri_prefix:
        raise ValueError("uri prefix must not be empty")
    start = master.find(uri_prefix)
    if start < 0:
        raise ValueError(f"uri prefix {uri_prefix!r} not found in master playlist")
    uris: list[str] = []
    while start >= 0:
        suffix = master.find(MEDIA_SUFFIX, start)
        if suffix < 0:
            raise ValueError("media playlist uri without m3u8 ending")
        end = suffix + len(MEDIA_SUFFIX)
        uris.append(master[start:end])
        start = master.find(uri_prefix, end + 1)
    return uris