# airmirror

`airmirror` contains the data-handling parts of an AirPlay mirroring and
audio-streaming receiver. It uses only the standard library.

## Modules

| Module | What it provides |
| --- | --- |
| `airmirror.pin` | `render_pin` |
| `airmirror.metadata` | `DmapItem`, `DmapError`, `parse_dmap_header`, `describe_tag`, `iter_listing_items`, `format_metadata` |
| `airmirror.volume` | `airplay_to_gain`, `format_progress` |
| `airmirror.playlists` | `expand_condensed_playlist`, `rewrite_master_playlist`, `media_uris` |
| `airmirror.features` | `FeatureSet`, `default_features`, `raop_txt_record`, `airplay_txt_record` |
| `airmirror.plists` | `PlaybackInfo`, `TimeRange`, `server_info_plist`, `set_property_response`, `query_float`, `parse_action`, `parse_play_request` |

## Pairing PIN

`render_pin(pin, margin, gap)` draws a decimal PIN in large ASCII-art digits.
The result is eight rows with a blank line before and after them. Each row
starts with `margin` spaces, and each digit is followed by `gap` spaces. A
PIN that is not a decimal number raises `ValueError`.

```python
from airmirror.pin import render_pin

print(render_pin("1234", margin=10, gap=3))
```

## Metadata

Clients send "now playing" information as a DMAP `mlit` listing item.

```python
from airmirror.metadata import format_metadata, iter_listing_items

for item in iter_listing_items(buffer):
    print(item.tag, item.label, item.data)
print(format_metadata(buffer, debug=False))
```

- `parse_dmap_header(data)` reads the 4-letter tag and the 32-bit big-endian
  length from an 8-byte header.
- `describe_tag(tag)` returns the label of a string-valued tag, such as
  `"Artist"` for `asar` or `"Title"` for `minm`. For any other tag it returns
  `None`.
- `format_metadata` prints each string item as `Label: value`. With
  `debug=True`, every item is announced first and non-string items are shown
  as a hex dump.

A malformed buffer raises `DmapError`, which is a subclass of `ValueError`.
This covers a bad header, a wrong outer tag or length, and leftover bytes.

## Volume and progress

`airplay_to_gain(volume, db_low=-30.0, db_high=0.0, taper=False)` converts an
AirPlay volume to a linear gain. The input is in the range -30..0 dB, with
-144 meaning mute. The slider range is mapped onto `db_low..db_high`. With
`taper=True`, each halving of the slider lowers the level by 10 dB, and the
level never falls below the flat mapping.

`format_progress(start, current, end)` takes RTP timestamps at 44.1 kHz and
returns a line giving position, time remaining and track length in min:sec.

## HLS playlists

- `rewrite_master_playlist(master, uri_prefix, local_prefix)` replaces the
  client's URI prefix with a local one.
- `media_uris(uri_prefix, master)` lists the media playlist URIs, each running
  from the prefix up to `m3u8`.
- `expand_condensed_playlist(playlist)` expands a media playlist that uses the
  `#YT-EXT-CONDENSED-URL` header into the standard form. Any other playlist is
  returned unchanged.

Malformed input raises `ValueError`.

## Feature flags and service records

```python
from airmirror.features import airplay_txt_record, default_features, raop_txt_record

features = default_features(hls_support=True, h265_support=False, legacy_pairing=True)
features.set_bit(8, False)
print(features.as_txt())  # "0x…,0x…"
record = airplay_txt_record("aa:bb:cc:dd:ee:ff", features)
raop = raop_txt_record()
```

`FeatureSet` holds the 64-bit features value. It has `set_bit`, `is_set`, and
the `low` and `high` 32-bit words. A bit outside 0..63 raises `ValueError`.

## Plist payloads

- `server_info_plist(hw_addr)` takes the hardware address as bytes and returns
  the XML server-info answer.
- `set_property_response(prop)` returns an XML plist with `errorCode` 0 for a
  known property, and `None` otherwise.
- `PlaybackInfo(duration, position, rate).to_plist()` returns the XML answer to
  a playback-info request. If no time ranges are given, it derives the loaded
  and seekable ranges from the position.
- `query_float(url)` reads the number after `=` in a URL query, such as
  `/scrub?position=12.5`. It returns `0.0` if the URL has no query.
- `parse_action(data)` reads a binary action plist and returns
  `(type, params)`.
- `parse_play_request(data)` reads a binary play plist and returns
  `(uuid, location, start_seconds)`.

```python
from airmirror.plists import PlaybackInfo, server_info_plist

body = server_info_plist(bytes.fromhex("aabbccddeeff"))
info = PlaybackInfo(duration=120.0, position=30.0, rate=1.0).to_plist()
```

## What this package does not do

`airmirror` provides functions and classes only. It has no command to run. It
does not:

- parse command-line options or read configuration files;
- open network ports, answer HTTP or RTSP requests, or register services
  over mDNS;
- decrypt, decode, play or display audio or video;
- write stream dumps;
- keep client allow or block lists or a pairing register.

The code that does these things must come from elsewhere and call into the
modules above.