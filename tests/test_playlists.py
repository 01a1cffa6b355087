import pytest

from airmirror.playlists import (
    expand_condensed_playlist,
    media_uris,
    rewrite_master_playlist,
)

CONDENSED_HEADER = (
    '#YT-EXT-CONDENSED-URL:BASE-URI="https://example.com/videoplayback",'
    'PARAMS="id,itag",PREFIX="sq/"\n'
)

CONDENSED = (
    "#EXTM3U\n"
    + CONDENSED_HEADER
    + "#EXTINF:5.0,\n"
    "sq/abc/137\n"
    "#EXTINF:5.0,\n"
    "sq/abd/137\n"
    "#EXT-X-ENDLIST\n"
)

MASTER = (
    "#EXTM3U\n"
    "#EXT-X-STREAM-INF:BANDWIDTH=1000\n"
    "mlhls://localhost/itag/230/media.m3u8\n"
    "#EXT-X-STREAM-INF:BANDWIDTH=2000\n"
    "mlhls://localhost/itag/231/media.m3u8\n"
)


def test_plain_playlist_is_unchanged():
    playlist = "#EXTM3U\n#EXTINF:5.0,\nhttps://example.com/a.ts\n#EXT-X-ENDLIST\n"
    assert expand_condensed_playlist(playlist) == playlist


def test_condensed_playlist_is_expanded():
    expected = (
        "#EXTM3U\n"
        + CONDENSED_HEADER
        + "#EXTINF:5.0,\n"
        "https://example.com/videoplayback/id/abc/itag/137\n"
        "#EXTINF:5.0,\n"
        "https://example.com/videoplayback/id/abd/itag/137\n"
        "#EXT-X-ENDLIST\n"
    )
    assert expand_condensed_playlist(CONDENSED) == expected


def test_expansion_keeps_chunk_count_and_tail():
    result = expand_condensed_playlist(CONDENSED)
    assert result.count("#EXTINF:") == CONDENSED.count("#EXTINF:")
    assert result.endswith("#EXT-X-ENDLIST\n")
    assert "\nsq/" not in result


def test_condensed_without_params_replaces_prefix_only():
    playlist = (
        "#EXTM3U\n"
        '#YT-EXT-CONDENSED-URL:BASE-URI="https://example.com/v",PARAMS="",PREFIX="sq/"\n'
        "#EXTINF:5.0,\n"
        "sq/seg1\n"
        "#EXT-X-ENDLIST\n"
    )
    result = expand_condensed_playlist(playlist)
    assert "https://example.com/vseg1\n" in result
    assert result.endswith("#EXT-X-ENDLIST\n")


def test_missing_header_raises():
    with pytest.raises(ValueError):
        expand_condensed_playlist("#EXTINF:5.0,\nsq/abc\n")


def test_chunk_without_prefix_raises():
    playlist = (
        "#EXTM3U\n"
        + CONDENSED_HEADER
        + "#EXTINF:5.0,\n"
        "other/abc/137\n"
        "#EXT-X-ENDLIST\n"
    )
    with pytest.raises(ValueError):
        expand_condensed_playlist(playlist)


def test_rewrite_master_replaces_every_prefix():
    local = "http://localhost:7100"
    result = rewrite_master_playlist(MASTER, "mlhls://localhost", local)
    assert "mlhls://localhost" not in result
    assert result.count(local) == MASTER.count("mlhls://localhost")
    assert result.replace(local, "mlhls://localhost") == MASTER


def test_rewrite_master_without_prefix_is_unchanged():
    assert rewrite_master_playlist(MASTER, "https://nowhere.example.com", "x") == MASTER


def test_rewrite_master_empty_prefix_raises():
    with pytest.raises(ValueError):
        rewrite_master_playlist(MASTER, "", "x")


def test_media_uris_lists_each_playlist_in_order():
    uris = media_uris("mlhls://localhost", MASTER)
    assert uris == [
        "mlhls://localhost/itag/230/media.m3u8",
        "mlhls://localhost/itag/231/media.m3u8",
    ]
    assert all(uri in MASTER for uri in uris)


def test_media_uris_missing_prefix_raises():
    with pytest.raises(ValueError):
        media_uris("https://nowhere.example.com", MASTER)


def test_media_uris_without_m3u8_raises():
    with pytest.raises(ValueError):
        media_uris("mlhls://localhost", "#EXTM3U\nmlhls://localhost/itag/230/media\n")