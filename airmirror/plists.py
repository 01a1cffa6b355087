"""Property lists exchanged with clients on the AirPlay HTTP channel."""

from __future__ import annotations

import plistlib
import re
from dataclasses import dataclass
from typing import Any

from airmirror.features import AIRPLAY_VV, GLOBAL_MODEL, GLOBAL_VERSION

SERVER_INFO_FEATURES = 0x27F
OS_BUILD_VERSION = "12B435"
PROTOCOL_VERSION = "1.0"

KNOWN_PROPERTIES = ("reverseEndTime", "forwardEndTime", "actionAtItemEnd")

ACTION_URL_RESPONSE = "unhandledURLResponse"
ACTION_PLAYLIST_INSERT = "playlistInsert"
ACTION_PLAYLIST_REMOVE = "playlistRemove"
_ACTION_TYPES = (ACTION_URL_RESPONSE, ACTION_PLAYLIST_INSERT, ACTION_PLAYLIST_REMOVE)

_FLOAT_PREFIX = re.compile(
    r"[ \t\n\v\f\r]*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _to_xml(root: dict[str, Any]) -> bytes:
    return plistlib.dumps(root, fmt=plistlib.FMT_XML, sort_keys=False)


def _load_dict(data: bytes, what: str) -> dict[str, Any]:
    if not data:
        raise ValueError(f"{what}: no plist data received")
    root = plistlib.loads(data)
    if not isinstance(root, dict):
        raise ValueError(f"{what}: plist root is not a dictionary")
    return root


@dataclass(frozen=True)
class TimeRange:
    """A span of media time, in seconds."""

    start: float
    duration: float

    def to_dict(self) -> dict[str, float]:
        return {"duration": float(self.duration), "start": float(self.start)}


@dataclass
class PlaybackInfo:
    """State of the media player, as reported to the client.

    When the time ranges are not given, the loaded range runs from the
    current position to the end and the seekable range from the start
    to the current position.
    """

    duration: float
    position: float
    rate: float
    ready_to_play: bool = True
    playback_buffer_empty: bool = False
    playback_buffer_full: bool = True
    playback_likely_to_keep_up: bool = True
    stallcount: int = 0
    loaded_time_ranges: list[TimeRange] | None = None
    seekable_time_ranges: list[TimeRange] | None = None

    def to_plist(self) -> bytes:
        """Serialise as the XML plist answering a playback-info request."""
        loaded = self.loaded_time_ranges
        if loaded is None:
            loaded = [TimeRange(self.position, self.duration - self.position)]
        seekable = self.seekable_time_ranges
        if seekable is None:
            seekable = [TimeRange(0.0, self.position)]
        root = {
            "duration": float(self.duration),
            "position": float(self.position),
            "rate": float(self.rate),
            "readyToPlay": int(self.ready_to_play),
            "playbackBufferEmpty": int(self.playback_buffer_empty),
            "playbackBufferFull": int(self.playback_buffer_full),
            "playbackLikelyToKeepUp": int(self.playback_likely_to_keep_up),
            "loadedTimeRanges": [r.to_dict() for r in loaded],
            "seekableTimeRanges": [r.to_dict() for r in seekable],
        }
        return _to_xml(root)


def server_info_plist(hw_addr: bytes) -> bytes:
    """Build the XML plist answering a server-info request."""
    address = ":".join(f"{octet:02x}" for octet in hw_addr)
    root = {
        "features": SERVER_INFO_FEATURES,
        "macAddress": address,
        "model": GLOBAL_MODEL,
        "osBuildVersion": OS_BUILD_VERSION,
        "protovers": PROTOCOL_VERSION,
        "srcvers": GLOBAL_VERSION,
        "vv": int(AIRPLAY_VV),
        "deviceid": address,
    }
    return _to_xml(root)


def set_property_response(prop: str) -> bytes | None:
    """Answer a setProperty request.

    Known properties get an XML plist with error code 0; unknown ones get
    no body (None).
    """
    if prop in KNOWN_PROPERTIES:
        return _to_xml({"errorCode": 0})
    return None


def query_float(url: str) -> float:
    """Read the number after ``=`` in the query of ``url``; 0.0 if absent."""
    query_start = url.find("?")
    if query_start < 0:
        return 0.0
    equals = url.find("=", query_start + 1)
    if equals < 0:
        raise ValueError(f"query of {url!r} has no value")
    match = _FLOAT_PREFIX.match(url, equals + 1)
    if match is None:
        return 0.0
    return float(match.group(0))


def parse_action(data: bytes) -> tuple[str | None, dict[str, Any]]:
    """Parse the binary plist of an action request.

    Returns the action type (None if unknown) and its parameters. For a
    URL response the parameters must hold ``FCUP_Response_URL`` (text)
    and ``FCUP_Response_Data`` (bytes); ValueError is raised otherwise.
    """
    root = _load_dict(data, "action")
    type_value = root.get("type")
    if not isinstance(type_value, str):
        raise ValueError("action: plist has no type string")
    kind = next((name for name in _ACTION_TYPES if name in type_value), None)
    if kind != ACTION_URL_RESPONSE:
        params = root.get("params")
        return kind, params if isinstance(params, dict) else {}
    params = root.get("params")
    if not isinstance(params, dict):
        raise ValueError("action: params is not a dictionary")
    if not isinstance(params.get("FCUP_Response_URL"), str):
        raise ValueError("action: FCUP_Response_URL missing")
    if not isinstance(params.get("FCUP_Response_Data"), bytes):
        raise ValueError("action: FCUP_Response_Data missing")
    return kind, params


def parse_play_request(data: bytes) -> tuple[str, str, float]:
    """Parse the binary plist of a play request.

    Returns (uuid, content location, start position in seconds); the start
    position defaults to 0.0.
    """
    root = _load_dict(data, "play")
    uuid = root.get("uuid")
    if not isinstance(uuid, str):
        raise ValueError("play: uuid missing")
    location = root.get("Content-Location")
    if not isinstance(location, str):
        raise ValueError("play: Content-Location missing")
    start = root.get("Start-Position-Seconds", 0.0)
    if not isinstance(start, (int, float)) or isinstance(start, bool):
        raise ValueError("play: Start-Position-Seconds is not a number")
    return uuid, location, float(start)