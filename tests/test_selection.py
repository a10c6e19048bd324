"""Tests for ranking and selection (core/ranking.py, core/selection.py).

Every test is a pure function call — no I/O, no mocking.  These tests
exercise:

* Single-kind filtering (muxed formats never selected)
* Video key order: quality label > width > height > fps > codec
* Audio key order: audio quality > channels > sample rate > codec
* Unrecognised codecs rank last; full ties keep input order
* Selector plugins merged over the built-ins
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from ytd_size.core.models import FormatDescriptor
from ytd_size.core.ranking import (
    RankStep,
    compare_formats,
    compare_known_first,
    compare_when_both,
    quality_label_height,
    rank_audio_formats,
    rank_video_formats,
)
from ytd_size.core.selection import (
    DefaultSelector,
    SelectorPlugin,
    filter_audio_only,
    filter_video_only,
    resolve_selector,
    select_audio,
    select_video,
)


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------

def _video(**overrides: Any) -> FormatDescriptor:
    defaults: dict[str, Any] = {
        "has_video": True,
        "has_audio": False,
        "height": 1080,
        "width": 1920,
        "fps": 30,
        "bitrate": 4_000_000,
    }
    codec = overrides.pop("codec", None)
    if codec is not None:
        defaults["mime_type"] = f'video/mp4; codecs="{codec}"'
    defaults.update(overrides)
    return FormatDescriptor(**defaults)


def _audio(**overrides: Any) -> FormatDescriptor:
    defaults: dict[str, Any] = {
        "has_video": False,
        "has_audio": True,
        "audio_channels": 2,
        "audio_sample_rate": 48_000,
        "bitrate": 128_000,
    }
    codec = overrides.pop("codec", None)
    if codec is not None:
        defaults["mime_type"] = f'audio/webm; codecs="{codec}"'
    defaults.update(overrides)
    return FormatDescriptor(**defaults)


def _muxed(**overrides: Any) -> FormatDescriptor:
    defaults: dict[str, Any] = {"has_video": True, "has_audio": True, "itag": 18}
    defaults.update(overrides)
    return FormatDescriptor(**defaults)


# ---------------------------------------------------------------------------
# Comparators
# ---------------------------------------------------------------------------

class TestComparators:
    def test_when_both_higher_first(self) -> None:
        assert compare_when_both(10, 5) < 0
        assert compare_when_both(5, 10) > 0
        assert compare_when_both(5, 5) == 0

    def test_when_both_skips_missing(self) -> None:
        assert compare_when_both(None, 5) == 0
        assert compare_when_both(5, None) == 0

    def test_known_first(self) -> None:
        assert compare_known_first(0, None) < 0
        assert compare_known_first(None, 0) > 0
        assert compare_known_first(None, None) == 0
        assert compare_known_first(3, 1) < 0

    def test_first_non_zero_step_decides(self) -> None:
        steps = (
            RankStep("height", lambda f: f.height),
            RankStep("fps", lambda f: f.fps),
        )
        a = _video(height=720, fps=60)
        b = _video(height=1080, fps=30)
        assert compare_formats(a, b, steps) > 0
        assert compare_formats(b, a, steps) < 0

    @pytest.mark.parametrize(
        ("label", "expected"),
        [("1080p60", 1080), ("720p", 720), ("2160p60 HDR", 2160), ("tiny", None), (None, None)],
    )
    def test_quality_label_height(self, label: str | None, expected: int | None) -> None:
        assert quality_label_height(_video(quality_label=label)) == expected


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

class TestFilters:
    def test_video_only(self) -> None:
        v, a, m = _video(), _audio(), _muxed()
        assert filter_video_only([v, a, m]) == [v]

    def test_audio_only(self) -> None:
        v, a, m = _video(), _audio(), _muxed()
        assert filter_audio_only([v, a, m]) == [a]

    def test_empty_input(self) -> None:
        assert filter_video_only([]) == []
        assert filter_audio_only([]) == []


# ---------------------------------------------------------------------------
# Video ranking
# ---------------------------------------------------------------------------

class TestVideoRanking:
    def test_quality_label_dominates_dimensions(self) -> None:
        small_label = _video(quality_label="720p", width=3840, height=2160)
        big_label = _video(quality_label="1080p", width=1920, height=1080)
        assert select_video([small_label, big_label]) is big_label

    def test_quality_label_ignored_when_one_side_missing(self) -> None:
        labelled = _video(quality_label="1080p", width=1280, height=720)
        unlabelled = _video(width=1920, height=1080)
        assert select_video([labelled, unlabelled]) is unlabelled

    def test_width_before_height(self) -> None:
        wide = _video(width=2560, height=1080)
        tall = _video(width=1920, height=1440)
        assert select_video([tall, wide]) is wide

    def test_greater_height_wins(self) -> None:
        low = _video(height=720)
        high = _video(height=1080)
        assert select_video([low, high]) is high
        assert select_video([high, low]) is high

    def test_fps_breaks_resolution_tie(self) -> None:
        slow = _video(fps=30)
        fast = _video(fps=60)
        assert select_video([slow, fast]) is fast

    def test_vp9_beats_h264(self) -> None:
        a = _video(height=1080, fps=30, codec="vp9")
        b = _video(height=1080, fps=30, codec="avc1.640028")
        assert select_video([b, a]) is a
        assert select_video([a, b]) is a

    def test_codec_preference_order(self) -> None:
        codecs = ["theora", "mp4v.20.3", "vp8", "avc1.4d401f", "hvc1.1", "vp9", "vp09.02.51.10", "av01.0.08M.08"]
        formats = [_video(codec=c) for c in codecs]
        ranked = rank_video_formats(formats)
        assert ranked == list(reversed(formats))

    def test_av1_from_itag_table(self) -> None:
        av1 = _video(itag=399, mime_type="video/mp4")
        vp9 = _video(codec="vp9")
        assert select_video([vp9, av1]) is av1

    def test_unrecognised_codec_ranks_last(self) -> None:
        odd = _video(codec="wmv3")
        theora = _video(codec="theora")
        assert select_video([odd, theora]) is theora

    def test_missing_codec_ranks_below_recognised(self) -> None:
        none = _video()
        h264 = _video(codec="avc1")
        assert select_video([none, h264]) is h264

    def test_full_tie_keeps_input_order(self) -> None:
        first = _video(itag=1)
        second = _video(itag=2)
        assert select_video([first, second]) is first
        assert select_video([second, first]) is second

    def test_two_unrecognised_codecs_tie(self) -> None:
        first = _video(codec="wmv3", itag=1)
        second = _video(codec="rv40", itag=2)
        assert rank_video_formats([first, second]) == [first, second]

    def test_full_sort_order(self) -> None:
        formats = [
            _video(itag=1, height=720, fps=30, width=1280),
            _video(itag=2, height=1080, fps=30, codec="avc1"),
            _video(itag=3, height=1080, fps=60),
            _video(itag=4, height=1080, fps=30, codec="vp9"),
            _video(itag=5, height=720, fps=60, width=1280),
        ]
        ranked = rank_video_formats(formats)
        assert [f.itag for f in ranked] == [3, 4, 2, 5, 1]


# ---------------------------------------------------------------------------
# Audio ranking
# ---------------------------------------------------------------------------

class TestAudioRanking:
    def test_quality_dominates_channels(self) -> None:
        a = _audio(audio_quality="AUDIO_QUALITY_HIGH", audio_channels=2)
        b = _audio(audio_quality="AUDIO_QUALITY_MEDIUM", audio_channels=6)
        assert select_audio([b, a]) is a

    def test_quality_ignored_when_one_side_missing(self) -> None:
        a = _audio(audio_quality="AUDIO_QUALITY_HIGH", audio_channels=2)
        b = _audio(audio_channels=6)
        assert select_audio([a, b]) is b

    def test_unlisted_quality_ranks_below_low(self) -> None:
        ultralow = _audio(
            audio_quality="AUDIO_QUALITY_ULTRALOW",
            audio_channels=6,
            audio_sample_rate=96_000,
        )
        high = _audio(audio_quality="AUDIO_QUALITY_HIGH", audio_channels=2)
        low = _audio(audio_quality="AUDIO_QUALITY_LOW", audio_channels=2)
        assert select_audio([ultralow, high]) is high
        assert select_audio([ultralow, low]) is low
        assert rank_audio_formats([ultralow, low, high]) == [high, low, ultralow]

    def test_unlisted_quality_ignored_against_missing(self) -> None:
        ultralow = _audio(audio_quality="AUDIO_QUALITY_ULTRALOW", audio_channels=6)
        unknown = _audio(audio_channels=2)
        assert select_audio([unknown, ultralow]) is ultralow

    def test_channels_before_sample_rate(self) -> None:
        stereo_hi = _audio(audio_channels=2, audio_sample_rate=96_000)
        surround = _audio(audio_channels=6, audio_sample_rate=44_100)
        assert select_audio([stereo_hi, surround]) is surround

    def test_sample_rate_breaks_tie(self) -> None:
        low = _audio(audio_sample_rate=44_100)
        high = _audio(audio_sample_rate=48_000)
        assert select_audio([low, high]) is high

    def test_opus_beats_aac(self) -> None:
        aac = _audio(codec="mp4a.40.2")
        opus = _audio(codec="opus")
        assert select_audio([aac, opus]) is opus

    def test_codec_from_itag_table(self) -> None:
        aac = _audio(itag=140)
        opus = _audio(itag=251)
        assert select_audio([aac, opus]) is opus

    def test_codec_preference_order(self) -> None:
        codecs = ["dtse", "ac-3", "ec-3", "ac-4", "mp3", "mp4a.40.2", "aac", "vorbis", "opus", "flac"]
        formats = [_audio(codec=c) for c in codecs]
        assert rank_audio_formats(formats) == list(reversed(formats))

    def test_full_tie_keeps_input_order(self) -> None:
        first = _audio(itag=1)
        second = _audio(itag=2)
        assert select_audio([first, second]) is first


# ---------------------------------------------------------------------------
# Selector contract
# ---------------------------------------------------------------------------

class TestSelectorContract:
    def test_empty_list_yields_none(self) -> None:
        assert select_video([]) is None
        assert select_audio([]) is None

    def test_muxed_only_yields_none(self) -> None:
        formats = [_muxed(), _muxed(itag=22)]
        assert select_video(formats) is None
        assert select_audio(formats) is None

    def test_result_is_member_of_right_kind(self) -> None:
        formats = [_muxed(height=4320), _audio(), _video(height=720), _video(height=480)]
        video = select_video(formats)
        audio = select_audio(formats)
        assert video in formats and video is not None and video.is_video_only
        assert audio in formats and audio is not None and audio.is_audio_only

    def test_input_not_mutated_and_idempotent(self) -> None:
        formats = [_video(height=480), _video(height=1080), _audio(), _video(height=720)]
        snapshot = list(formats)
        first = select_video(formats)
        second = select_video(formats)
        assert formats == snapshot
        assert first is second

    def test_rank_returns_new_list(self) -> None:
        formats = [_video(height=480), _video(height=1080)]
        ranked = rank_video_formats(formats)
        assert ranked is not formats
        assert [f.height for f in formats] == [480, 1080]


# ---------------------------------------------------------------------------
# Swappable selectors
# ---------------------------------------------------------------------------

def _lowest_height(formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
    videos = filter_video_only(formats)
    return min(videos, key=lambda f: f.height or 0) if videos else None


class TestResolveSelector:
    def test_none_gives_default(self) -> None:
        assert isinstance(resolve_selector(None), DefaultSelector)

    def test_empty_plugin_gives_default(self) -> None:
        assert isinstance(resolve_selector(SelectorPlugin()), DefaultSelector)

    def test_plugin_overrides_video_only(self) -> None:
        low = _video(height=480)
        high = _video(height=1080)
        opus = _audio(codec="opus")
        aac = _audio(codec="mp4a.40.2")
        selector = resolve_selector(SelectorPlugin(select_video=_lowest_height))

        assert selector.select_video([high, low, aac, opus]) is low
        # Audio falls back to the built-in ranking.
        assert selector.select_audio([high, low, aac, opus]) is opus

    def test_plugin_overrides_audio(self) -> None:
        first = _audio(codec="mp4a.40.2")
        plugin = SelectorPlugin(select_audio=lambda formats: formats[0] if formats else None)
        selector = resolve_selector(plugin)
        assert selector.select_audio([first, _audio(codec="opus")]) is first

    def test_default_selector_matches_functions(self) -> None:
        formats = [_video(height=480), _video(height=1080), _audio()]
        selector = DefaultSelector()
        assert selector.select_video(formats) is select_video(formats)
        assert selector.select_audio(formats) is select_audio(formats)
