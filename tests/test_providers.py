# tests/test_providers.py

import httpx
import logging
import pytest
from datetime import datetime, timedelta, timezone

from hilal.core.config import ProviderConfig
from hilal.core.errors import InvalidArgumentError, ProviderError
from hilal.core.provider import SunsetProvider
from hilal.core.types import SunsetMoonset
from hilal.providers import AstronomicalSunsetProvider, FallbackSunsetProvider, SunriseSunsetProvider

UTC = timezone.utc


def _minutes(a: datetime, b: datetime) -> float:
    return abs((a - b).total_seconds()) / 60.0


# ---------- local solar model ----------

def test_local_provider_san_francisco():
    p = AstronomicalSunsetProvider()
    sm = p.get_sunset_and_moonset(datetime(2024, 1, 11, 11, 57, tzinfo=UTC), 37.7749, -122.4194)
    # 17:10 PST
    assert _minutes(sm.sunset, datetime(2024, 1, 12, 1, 9, tzinfo=UTC)) <= 10.0
    # civil dusk is roughly half an hour after sunset in winter at this latitude
    assert 20.0 <= sm.minutes_between <= 40.0
    assert sm.sunset.tzinfo is not None


def test_local_provider_golden_colorado():
    # NREL solar position report, 2003-10-17, Golden CO: sunset 18:20:19 MDT
    p = AstronomicalSunsetProvider()
    sm = p.get_sunset_and_moonset(datetime(2003, 10, 17, 12, tzinfo=UTC), 39.742476, -105.1786)
    assert _minutes(sm.sunset, datetime(2003, 10, 18, 0, 20, 19, tzinfo=UTC)) <= 3.0


def test_local_provider_greenwich_midsummer():
    p = AstronomicalSunsetProvider()
    sm = p.get_sunset_and_moonset(datetime(2024, 6, 21, tzinfo=UTC), 51.4769, 0.0)
    assert _minutes(sm.sunset, datetime(2024, 6, 21, 20, 21, tzinfo=UTC)) <= 5.0


def test_local_provider_polar_day():
    p = AstronomicalSunsetProvider()
    with pytest.raises(ProviderError):
        p.get_sunset_and_moonset(datetime(2024, 6, 21, tzinfo=UTC), 89.0, 0.0)


def test_local_provider_rejects_bad_location():
    with pytest.raises(InvalidArgumentError):
        AstronomicalSunsetProvider().get_sunset_and_moonset(datetime(2024, 6, 21, tzinfo=UTC), 91.0, 0.0)


def test_providers_satisfy_protocol():
    assert isinstance(AstronomicalSunsetProvider(), SunsetProvider)
    assert isinstance(SunriseSunsetProvider(), SunsetProvider)


# ---------- sunrise-sunset.org ----------

OK_PAYLOAD = {
    "results": {
        "sunrise": "2024-01-11T15:25:12+00:00",
        "sunset": "2024-01-12T01:10:15+00:00",
        "civil_twilight_end": "2024-01-12T01:38:02+00:00",
    },
    "status": "OK",
}


def _api(handler) -> SunriseSunsetProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return SunriseSunsetProvider(ProviderConfig(sunset_api_url="https://example.test/json"), client=client)


def test_api_provider_parses_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=OK_PAYLOAD)

    sm = _api(handler).get_sunset_and_moonset(datetime(2024, 1, 11, 11, 57, tzinfo=UTC), 37.7749, -122.4194)

    assert sm.sunset == datetime(2024, 1, 12, 1, 10, 15, tzinfo=UTC)
    assert sm.moonset == datetime(2024, 1, 12, 1, 38, 2, tzinfo=UTC)
    assert seen["params"] == {"lat": "37.7749", "lng": "-122.4194", "date": "2024-01-11", "formatted": "0"}


def test_api_provider_uses_utc_date():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["date"] = request.url.params["date"]
        return httpx.Response(200, json=OK_PAYLOAD)

    pst = timezone(timedelta(hours=-8))
    _api(handler).get_sunset_and_moonset(datetime(2024, 1, 10, 20, 0, tzinfo=pst), 0.0, 0.0)
    assert seen["date"] == "2024-01-11"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="server error"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"status": "INVALID_REQUEST", "results": ""}),
        httpx.Response(200, json={"status": "OK", "results": {"sunrise": "x"}}),
        httpx.Response(200, json={"status": "OK", "results": {"sunset": 5, "civil_twilight_end": 6}}),
        httpx.Response(200, json={"status": "OK", "results": {"sunset": "soon", "civil_twilight_end": "later"}}),
        httpx.Response(200, json=["OK"]),
    ],
)
def test_api_provider_errors(response):
    provider = _api(lambda request: response)
    with pytest.raises(ProviderError):
        provider.get_sunset_and_moonset(datetime(2024, 1, 11, tzinfo=UTC), 37.7749, -122.4194)


def test_api_provider_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError):
        _api(handler).get_sunset_and_moonset(datetime(2024, 1, 11, tzinfo=UTC), 37.7749, -122.4194)


# ---------- fallback ----------

class _Failing:
    calls = 0

    def get_sunset_and_moonset(self, date, latitude, longitude):
        self.calls += 1
        raise ProviderError("down")


class _Fixed:
    def __init__(self, sunset: datetime):
        self.result = SunsetMoonset(sunset=sunset, moonset=sunset + timedelta(minutes=30))

    def get_sunset_and_moonset(self, date, latitude, longitude):
        return self.result


def test_fallback_uses_next_provider(caplog):
    failing = _Failing()
    fixed = _Fixed(datetime(2024, 1, 12, 1, 10, tzinfo=UTC))
    with caplog.at_level(logging.WARNING, logger="hilal.providers.fallback"):
        sm = FallbackSunsetProvider(failing, fixed).get_sunset_and_moonset(datetime(2024, 1, 11, tzinfo=UTC), 0.0, 0.0)
    assert sm is fixed.result
    assert failing.calls == 1
    assert "_Failing failed" in caplog.text


def test_fallback_stops_at_first_success():
    first = _Fixed(datetime(2024, 1, 12, 1, 0, tzinfo=UTC))
    failing = _Failing()
    sm = FallbackSunsetProvider(first, failing).get_sunset_and_moonset(datetime(2024, 1, 11, tzinfo=UTC), 0.0, 0.0)
    assert sm is first.result
    assert failing.calls == 0


def test_fallback_raises_last_error():
    with pytest.raises(ProviderError, match="down"):
        FallbackSunsetProvider(_Failing(), _Failing()).get_sunset_and_moonset(datetime(2024, 1, 11, tzinfo=UTC), 0.0, 0.0)


def test_fallback_needs_a_provider():
    with pytest.raises(InvalidArgumentError):
        FallbackSunsetProvider()


def test_fallback_last_error_propagates_unchanged(caplog):
    class _Last:
        error = ProviderError("last one down")

        def get_sunset_and_moonset(self, date, latitude, longitude):
            raise self.error

    last = _Last()
    with caplog.at_level(logging.WARNING, logger="hilal.providers.fallback"):
        with pytest.raises(ProviderError) as excinfo:
            FallbackSunsetProvider(_Failing(), last).get_sunset_and_moonset(datetime(2024, 1, 11, tzinfo=UTC), 0.0, 0.0)
    assert excinfo.value is last.error
    assert "_Last failed" not in caplog.text


def test_single_provider_fallback():
    fixed = _Fixed(datetime(2024, 1, 12, 1, 0, tzinfo=UTC))
    assert FallbackSunsetProvider(fixed).get_sunset_and_moonset(datetime(2024, 1, 11, tzinfo=UTC), 0.0, 0.0) is fixed.result
