"""Tests for the Timecode value type."""

import operator
from fractions import Fraction

import pytest

from videotimecode import (
    InvalidRate,
    OutOfRange,
    ParseError,
    Timecode,
    TimecodeConfig,
    TimecodeError,
)


class TestConstruction:
    def test_fields_at_default_rate(self):
        tc = Timecode(2, 0, 0, 12)
        assert tc.total_frames == (2 * 3600) * 30 + 12
        assert tc.fps == 29.97
        assert tc.is_dropframe is False
        assert str(tc) == "02:00:00:12"

    def test_tuple(self):
        assert Timecode((2, 0, 0, 12)) == Timecode(2, 0, 0, 12)
        assert Timecode((1, 2, 3)).fields == (1, 2, 3, 0)

    def test_string_with_fps(self):
        tc = Timecode("00:10:30:00", fps=25)
        assert tc.total_frames == 15750
        assert tc.fps == 25

    def test_frame_count(self):
        tc = Timecode(1800)
        assert tc.total_frames == 1800
        assert tc.fields == (0, 1, 0, 0)

    def test_no_value(self):
        assert Timecode().total_frames == 0
        assert str(Timecode()) == "00:00:00:00"

    def test_accessors(self):
        tc = Timecode("01:02:03:04", fps=25)
        assert (tc.hours, tc.minutes, tc.seconds, tc.frames) == (1, 2, 3, 4)
        assert tc.delimiter == ":"
        assert tc.frame_delimiter == ":"
        assert tc.default_format == (":", ":", ":")
        assert Timecode(0).default_format is None

    def test_hours_out_of_range(self):
        with pytest.raises(OutOfRange):
            Timecode(100, 0, 0, 0)

    def test_zero_fps(self):
        with pytest.raises(InvalidRate):
            Timecode(0, fps=0)

    def test_malformed_string(self):
        with pytest.raises(ParseError):
            Timecode("12:34")

    def test_copy(self):
        tc = Timecode("00:01:00.04")
        copy = Timecode(tc)
        assert copy == tc
        assert copy is not tc
        assert str(copy) == "00:01:00.04"

    def test_copy_ignores_config(self):
        tc = Timecode(10, fps=25)
        copy = Timecode(tc, config=TimecodeConfig(fps=50, delimiter="-"))
        assert copy.fps == 25
        assert str(copy) == "00:00:00:10"

    def test_copy_with_overrides(self):
        tc = Timecode("00:00:01:00", fps=25)
        copy = Timecode(tc, fps=30, frame_delimiter="f")
        assert copy.total_frames == 25
        assert copy.fps == 30
        assert str(copy) == "00:00:00f25"

    def test_from_seconds(self):
        assert Timecode.from_seconds(1.5, fps=25).total_frames == 38
        assert Timecode.from_seconds(Fraction(1, 3), fps=30).total_frames == 10
        assert Timecode.from_seconds(60).total_frames == 1800

    def test_immutable(self):
        tc = Timecode(10)
        with pytest.raises(AttributeError):
            tc.fps = 25
        with pytest.raises(AttributeError):
            tc.total_frames = 1
        with pytest.raises(AttributeError):
            tc.anything = 1


class TestDropFrame:
    def test_sniffed_from_string(self):
        tc = Timecode("00:01:00;04")
        assert tc.is_dropframe is True
        assert tc.total_frames == 1802
        assert str(tc) == "00:01:00;04"

    def test_subtraction_keeps_dropframe(self):
        """00:01:00;04 is frame 1802 in the standard drop frame table.

        So 1800 frames earlier is 00:00:00;02, and 00:00:02;00 (frame 60)
        is 1742 frames earlier, not 1800.
        """
        tc = Timecode("00:01:00;04") - 1800
        assert tc.is_dropframe is True
        assert tc.total_frames == 2
        assert str(tc) == "00:00:00;02"
        assert str(Timecode("00:01:00;04") - 1742) == "00:00:02;00"

    def test_dropframe_default_delimiter(self):
        assert str(Timecode(1802, dropframe=True)) == "00:01:00;04"

    def test_explicit_frame_delimiter(self):
        assert str(Timecode(1802, dropframe=True, frame_delimiter=":")) == "00:01:00:04"

    def test_to_dropframe(self):
        tc = Timecode(1802)
        df = tc.to_dropframe()
        assert df is not tc
        assert df.is_dropframe is True
        assert df.total_frames == tc.total_frames
        assert df.fps == tc.fps
        assert str(df) == "00:01:00;04"
        assert tc.is_dropframe is False

    def test_to_non_dropframe(self):
        tc = Timecode("00:01:00;04")
        ndf = tc.to_non_dropframe()
        assert ndf.is_dropframe is False
        assert ndf.total_frames == 1802
        assert str(ndf) == "00:01:00:02"

    def test_identity_when_already_in_mode(self):
        df = Timecode("00:01:00;04")
        ndf = Timecode(10)
        assert df.to_dropframe() is df
        assert ndf.to_non_dropframe() is ndf

    def test_idempotence(self):
        tc = Timecode(123456)
        assert tc.to_dropframe().to_dropframe() == tc.to_dropframe()
        assert tc.to_dropframe().to_dropframe().is_dropframe is True
        assert tc.to_non_dropframe().to_non_dropframe() is tc

    def test_to_dropframe_out_of_range(self):
        tc = Timecode(99, 59, 59, 29, fps=30)
        with pytest.raises(OutOfRange):
            tc.to_dropframe()


class TestConvert:
    def test_keeps_duration(self):
        tc = Timecode("00:00:01:00", fps=25).convert(30)
        assert tc.total_frames == 30
        assert tc.fps == 30
        assert str(tc) == "00:00:01:00"

    def test_result_is_non_dropframe(self):
        tc = Timecode("00:01:00;04").convert(25)
        assert tc.is_dropframe is False
        assert tc.total_frames == 1502

    def test_dropframe_override(self):
        tc = Timecode(1800, fps=25).convert(59.94, dropframe=True)
        assert tc.is_dropframe is True
        assert tc.total_frames == 4320

    def test_inherits_delimiters(self):
        tc = Timecode(0, fps=25, delimiter="-", frame_delimiter="_").convert(30)
        assert str(tc) == "00-00-00_00"
        assert str(tc.convert(24, delimiter="/")) == "00/00/00_00"

    def test_keeps_real_rate(self):
        assert Timecode(0).convert(23.976).fps == 23.976

    @pytest.mark.parametrize("fps, other", [(25, 30), (29.97, 24), (60, 25), (24, 23.976)])
    def test_round_trip_within_a_frame(self, fps, other):
        for frames in range(0, 100000, 733):
            tc = Timecode(frames, fps=fps)
            back = tc.convert(other).convert(fps)
            assert abs(back.total_frames - frames) <= 1

    def test_invalid_rate(self):
        with pytest.raises(InvalidRate):
            Timecode(10).convert(0)

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            Timecode(10).convert(25, fpz=30)


class TestArithmetic:
    def test_add_timecodes(self):
        tc = Timecode(1800) + Timecode(1)
        assert tc.total_frames == 1801
        assert tc.fps == 29.97

    def test_left_operand_options_win(self):
        a = Timecode(25, fps=25)
        b = Timecode(30, fps=30, dropframe=True)
        result = a + b
        assert result.total_frames == 55
        assert result.fps == 25
        assert result.is_dropframe is False
        assert (b + a).fps == 30
        assert (b + a).is_dropframe is True

    def test_literal_on_the_left(self):
        b = Timecode(10, fps=25)
        result = 5 + b
        assert result.total_frames == 15
        assert result.fps == 25

    def test_strings(self):
        tc = Timecode(0, fps=25)
        assert (tc + "00:00:01:00").total_frames == 25
        assert ("00:00:01:00" + tc).total_frames == 25
        assert ("00:00:02:00" - Timecode(10, fps=25)).total_frames == 40

    def test_string_uses_timecode_options(self):
        tc = Timecode(0, fps=25, delimiter="-")
        assert tc.add("00-00-01:05").total_frames == 30
        with pytest.raises(ParseError):
            tc.add("00:00:01:05")

    def test_named_operations(self):
        tc = Timecode(100, fps=25)
        assert tc.add(5).total_frames == 105
        assert tc.subtract(5).total_frames == 95
        assert tc.multiply(2).total_frames == 200
        assert tc.divide(3).total_frames == 33
        assert tc.next().total_frames == 101
        assert tc.back().total_frames == 99
        assert tc.total_frames == 100

    def test_operators(self):
        tc = Timecode(10)
        assert (tc * 3).total_frames == 30
        assert (3 * tc).total_frames == 30
        assert (tc * Timecode(2)).total_frames == 20
        assert (tc / 3).total_frames == 3
        assert (tc // 3).total_frames == 3
        assert (30 / tc).total_frames == 3
        assert (100 - tc).total_frames == 90

    def test_layout_is_kept(self):
        tc = Timecode("00:00:01.00", dropframe=False) + 1
        assert str(tc) == "00:00:01.01"

    def test_negative_result(self):
        with pytest.raises(OutOfRange):
            Timecode(30) - 100
        with pytest.raises(OutOfRange):
            Timecode(0).back()
        with pytest.raises(OutOfRange):
            10 - Timecode(30)

    def test_overflow(self):
        with pytest.raises(OutOfRange):
            Timecode(99, 59, 59, 29, fps=30).next()

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            Timecode(10) / 0

    def test_unsupported_type(self):
        with pytest.raises(TimecodeError):
            Timecode(10) + 1.5
        with pytest.raises(TimecodeError):
            1.5 + Timecode(10)

    def test_unparsable_string(self):
        with pytest.raises(ParseError):
            Timecode(10) + "later"


class TestComparison:
    def test_options_are_ignored(self):
        assert Timecode(25, fps=25) == Timecode(25, fps=30, dropframe=True)
        assert Timecode(25, fps=25) < Timecode(26, fps=30)

    def test_ints(self):
        tc = Timecode(10)
        assert tc == 10
        assert 10 == tc
        assert tc != 11
        assert tc < 11
        assert tc <= 10
        assert tc > 9
        assert tc >= 10
        assert 5 < tc

    def test_strings(self):
        tc = Timecode(25, fps=25)
        assert tc == "00:00:01:00"
        assert tc > "00:00:00:24"
        assert "00:00:01:01" > tc

    def test_compare(self):
        tc = Timecode(10)
        assert tc.compare(11) == -1
        assert tc.compare(Timecode(10, fps=25)) == 0
        assert tc.compare("00:00:00:05") == 1
        with pytest.raises(TypeError):
            tc.compare(None)

    def test_unsupported_types(self):
        tc = Timecode(10)
        assert (tc == None) is False  # noqa: E711
        assert tc != 10.0
        with pytest.raises(TypeError):
            tc < 1.5

    def test_unparsable_string(self):
        with pytest.raises(ParseError):
            Timecode(10) == "garbage"

    def test_sorting_and_hashing(self):
        a, b, c = Timecode(3), Timecode(1, fps=25), Timecode(2)
        assert sorted([a, b, c]) == [1, 2, 3]
        assert len({Timecode(1), Timecode(1, fps=25)}) == 1


class TestConversions:
    def test_index(self):
        tc = Timecode(5)
        assert operator.index(tc) == 5
        assert list(range(10))[tc] == 5

    def test_int_and_float(self):
        tc = Timecode(50, fps=25)
        assert int(tc) == 50
        assert float(tc) == 2.0
        assert tc.total_seconds() == Fraction(2)

    def test_real_time_seconds(self):
        tc = Timecode(30000, fps=Fraction(30000, 1001))
        assert tc.total_seconds() == Fraction(1001)

    def test_repr(self):
        assert repr(Timecode(1802, dropframe=True)) == (
            "Timecode(1802, fps=29.97, dropframe=True)"
        )


def test_hash_follows_frame_count_not_strings():
    tc = Timecode(25, fps=25)
    assert tc == "00:00:01:00"
    assert {tc: "a"}[25] == "a"
    assert "00:00:01:00" not in {tc}
