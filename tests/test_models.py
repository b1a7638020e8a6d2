import math

import pytest

from frakt.models import (
    PixelData,
    PixelIntensity,
    Point,
    Range,
    Resolution,
    U8Data,
    pixel_intensities_from_bytes,
)


def test_should_convert_vector_to_pixel_intensity():
    result = pixel_intensities_from_bytes(bytes(16))
    assert len(result) == 1
    assert result[0].zn == 0.0
    assert result[0].count == 0.0


def test_should_handle_vector_with_incomplete_zn_bytes():
    assert pixel_intensities_from_bytes(bytes(7)) == []


def test_eight_bytes_alone_yield_nothing():
    assert pixel_intensities_from_bytes(bytes(8)) == []


def test_zero_intensity_bytes():
    assert PixelIntensity(0.0, 0.0).to_bytes() == bytes(8)


def test_one_is_big_endian_f32():
    assert PixelIntensity(1.0, 0.0).to_bytes() == b"\x3f\x80\x00\x00" + bytes(4)


def test_bytes_round_trip_with_trailing_padding():
    values = [PixelIntensity(0.1, 0.25), PixelIntensity(3.5, 1.0), PixelIntensity(-2.0, 0.5)]
    payload = b"".join(v.to_bytes() for v in values) + bytes(4)
    assert pixel_intensities_from_bytes(payload) == values


def test_last_record_dropped_without_padding():
    values = [PixelIntensity(1.5, 0.5), PixelIntensity(2.5, 0.75)]
    payload = b"".join(v.to_bytes() for v in values)
    assert pixel_intensities_from_bytes(payload) == values[:1]


def test_intensity_overflow_saturates():
    assert PixelIntensity(1e300, 0.0).zn == math.inf


def test_point_round_trip():
    p = Point(-2.0, 3.55556)
    assert Point.from_dict(p.to_dict()) == p


def test_range_round_trip():
    r = Range(Point(-2.0, -1.5), Point(2.0, 1.5))
    assert r.to_dict() == {"min": {"x": -2.0, "y": -1.5}, "max": {"x": 2.0, "y": 1.5}}
    assert Range.from_dict(r.to_dict()) == r


def test_point_accepts_integers():
    assert Point.from_dict({"x": 1, "y": 2}) == Point(1.0, 2.0)


def test_resolution_round_trip():
    res = Resolution(1080, 1920)
    assert res.to_dict() == {"nx": 1080, "ny": 1920}
    assert Resolution.from_dict(res.to_dict()) == res


def test_resolution_rejects_out_of_range():
    with pytest.raises(ValueError):
        Resolution(70000, 1)


def test_resolution_rejects_float_field():
    with pytest.raises(ValueError):
        Resolution.from_dict({"nx": 1.0, "ny": 1})


def test_u8data_round_trip():
    data = U8Data(0, 16)
    assert data.to_dict() == {"offset": 0, "count": 16}
    assert U8Data.from_dict(data.to_dict()) == data


def test_u8data_rejects_negative():
    with pytest.raises(ValueError):
        U8Data(-1, 0)


def test_pixel_data_round_trip():
    data = PixelData(16, 480000)
    assert PixelData.from_dict(data.to_dict()) == data


def test_pixel_data_missing_field():
    with pytest.raises(ValueError):
        PixelData.from_dict({"offset": 0})