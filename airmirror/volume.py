"""Conversion of AirPlay volume settings and progress reports."""

from __future__ import annotations

import logging
import math

_log = logging.getLogger(__name__)

AIRPLAY_MUTE = -144.0
AIRPLAY_MIN = -30.0
AIRPLAY_MAX = 0.0
SAMPLE_RATE = 44100


def airplay_to_gain(
    volume: float,
    db_low: float = -30.0,
    db_high: float = 0.0,
    taper: bool = False,
) -> float:
    """Convert an AirPlay volume (-30..0 dB, -144 for mute) to a linear gain.

    The slider range is rescaled onto ``db_low..db_high``; with ``taper``
    each halving of the slider length lowers the level by 10 dB, never
    below the flat rescaling.
    """
    if volume == AIRPLAY_MUTE:
        frac = 0.0
    elif volume < AIRPLAY_MIN:
        _log.error(" invalid AirPlay volume %f", volume)
        frac = 0.0
    elif volume > AIRPLAY_MAX:
        _log.error(" invalid AirPlay volume %f", volume)
        frac = 1.0
    elif volume == AIRPLAY_MIN:
        frac = 0.0
    elif volume == AIRPLAY_MAX:
        frac = 1.0
    else:
        frac = min((30.0 + volume) / 30.0, 1.0)

    if frac == 0.0:
        return 0.0
    db_flat = db_low + (db_high - db_low) * frac
    if taper:
        db = max(db_high + 10.0 * (math.log10(frac) / math.log10(2.0)), db_flat)
    else:
        db = db_flat
    return math.pow(10.0, 0.05 * db)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _min_sec(seconds: int) -> str:
    minutes = _trunc_div(seconds, 60)
    rest = seconds - minutes * 60
    sign = "-" if rest < 0 else ""
    return f"{minutes}:{sign}{abs(rest):02d}"


def format_progress(start: int, current: int, end: int) -> str:
    """Describe a progress report given as RTP timestamps at 44.1 kHz."""
    duration = _trunc_div(_to_int32(end - start), SAMPLE_RATE)
    position = _trunc_div(_to_int32(current - start), SAMPLE_RATE)
    remain = duration - position
    return (
        f"audio progress (min:sec): {_min_sec(position)}; "
        f"remaining: {_min_sec(remain)}; track length {_min_sec(duration)}"
    )