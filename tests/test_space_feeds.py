import pytest

from space_feeds import DEFAULT_SOLAR_WIND_SPEED_KMS, shape_kp_index_payload


def test_shape_header_and_rows_payload_uses_latest_row() -> None:
    payload = [
        ["time_tag", "Kp", "a_running", "station_count"],
        ["2025-05-01 00:00:00.000", "1.67", "6", "8"],
        ["2025-05-01 03:00:00.000", "2.33", "9", "8"],
    ]

    candidate = shape_kp_index_payload(payload)

    assert candidate["geomagneticData"] == {"kpIndex": 2.33, "timestamp": "2025-05-01T03:00:00.000Z"}
    assert candidate["solarWind"]["speed"] == DEFAULT_SOLAR_WIND_SPEED_KMS
    assert candidate["solarWind"]["timestamp"].endswith("Z")


def test_shape_object_rows_payload() -> None:
    payload = [
        {"time_tag": "2025-05-01T00:00:00", "Kp": 1.0},
        {"time_tag": "2025-05-01T03:00:00", "Kp": 4.67},
    ]

    candidate = shape_kp_index_payload(payload)

    assert candidate["geomagneticData"]["kpIndex"] == 4.67
    assert candidate["geomagneticData"]["timestamp"] == "2025-05-01T03:00:00.000Z"


def test_shape_estimated_kp_rows() -> None:
    candidate = shape_kp_index_payload([{"time_tag": "garbage", "estimated_kp": 2}])

    assert candidate["geomagneticData"]["kpIndex"] == 2.0
    assert candidate["geomagneticData"]["timestamp"].endswith("Z")


@pytest.mark.parametrize("payload", [
    [],
    {"Kp": 3},
    [["time_tag", "Kp"]],
    [{"time_tag": "2025-05-01T00:00:00"}],
    ["not a row"],
])
def test_shape_rejects_unusable_payloads(payload: object) -> None:
    with pytest.raises(ValueError):
        shape_kp_index_payload(payload)
