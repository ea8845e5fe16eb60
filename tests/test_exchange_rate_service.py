from datetime import datetime, timedelta

import pytest
import requests

from aduana_rd.config.settings import Config
from aduana_rd.services.cache_service import RateCache
from aduana_rd.services.exchange_rate_service import (
    SOURCE_BCRD,
    SOURCE_EXCHANGE_RATE_API,
    SOURCE_FALLBACK,
    ExchangeRateService,
    convert_usd_to_dop,
    get_selling_rate_from_bcrd,
    usable_rate,
)
from tests.fakes import FakeHTTPResponse, FakeSession

NOW = datetime(2026, 10, 19, 12, 0, 0)

BCRD_INDICATORS = [
    {"indicatorName": "Dólar Estadounidense Compra", "value": 59.10},
    {"indicatorName": "Dólar Estadounidense Venta", "value": 59.45},
    {"indicatorName": "Euro Venta", "value": 64.2},
]


def make_service(routes):
    session = FakeSession(routes)
    return ExchangeRateService(cache=RateCache(ttl_seconds=3600), session=session, clock=lambda: NOW), session


def test_selling_rate_matches_name_case_insensitively():
    assert get_selling_rate_from_bcrd(BCRD_INDICATORS) == 59.45
    assert get_selling_rate_from_bcrd([{"indicatorName": "DÓLAR ESTADOUNIDENSE VENTA", "value": 60}]) == 60


def test_selling_rate_missing_indicator():
    assert get_selling_rate_from_bcrd([{"indicatorName": "Euro Venta", "value": 64.2}]) is None
    assert get_selling_rate_from_bcrd(None) is None
    assert get_selling_rate_from_bcrd({"data": []}) is None


def test_primary_source_used_first():
    service, session = make_service({"bcrd": FakeHTTPResponse(BCRD_INDICATORS)})

    assert service.get_rate() == 59.45
    assert len(session.calls) == 1
    assert session.calls[0][1] == Config.RATE_TIMEOUT_SECONDS
    assert service.get_rate_info().source == SOURCE_BCRD


def test_primary_source_wrapped_in_data_key():
    service, _ = make_service({"bcrd": FakeHTTPResponse({"data": BCRD_INDICATORS})})
    assert service.get_rate() == 59.45


def test_secondary_source_when_primary_times_out():
    service, session = make_service({
        "bcrd": requests.Timeout("timed out"),
        "exchangerate-api": FakeHTTPResponse({"conversion_rates": {"DOP": 60.12, "EUR": 0.92}}),
    })

    assert service.get_rate() == 60.12
    assert len(session.calls) == 2
    assert service.get_rate_info().source == SOURCE_EXCHANGE_RATE_API


def test_secondary_source_when_primary_shape_unexpected():
    service, _ = make_service({
        "bcrd": FakeHTTPResponse([{"indicatorName": "Euro Venta", "value": 64.2}]),
        "exchangerate-api": FakeHTTPResponse({"conversion_rates": {"DOP": 60.12}}),
    })
    assert service.get_rate() == 60.12


def test_fallback_when_both_sources_fail():
    service, _ = make_service({
        "bcrd": FakeHTTPResponse(status_code=503),
        "exchangerate-api": FakeHTTPResponse(json_error=ValueError("not json")),
    })

    assert service.get_rate() == Config.FALLBACK_EXCHANGE_RATE
    info = service.get_rate_info()
    assert info.is_fallback
    assert info.source == SOURCE_FALLBACK
    assert info.last_fetched == NOW


def test_cached_rate_reused_within_ttl():
    service, session = make_service({"bcrd": FakeHTTPResponse(BCRD_INDICATORS)})

    service.get_rate(now=NOW)
    assert service.get_rate(now=NOW + timedelta(minutes=59)) == 59.45
    assert len(session.calls) == 1


def test_cached_rate_refetched_after_ttl():
    service, session = make_service({"bcrd": FakeHTTPResponse(BCRD_INDICATORS)})

    service.get_rate(now=NOW)
    session.routes["bcrd"] = FakeHTTPResponse([{"indicatorName": "Dólar Estadounidense Venta", "value": 61.0}])

    assert service.get_rate(now=NOW + timedelta(hours=1)) == 61.0
    assert len(session.calls) == 2
    assert service.get_rate_info().last_fetched == NOW + timedelta(hours=1)


def test_fallback_is_cached_too():
    service, session = make_service({})

    service.get_rate(now=NOW)
    service.get_rate(now=NOW + timedelta(minutes=5))
    assert len(session.calls) == 2


def test_cache_clear():
    cache = RateCache(ttl_seconds=3600)
    cache.set(59.0, NOW, SOURCE_BCRD)
    assert cache.get(NOW) == 59.0

    cache.clear()
    assert cache.get(NOW) is None
    assert cache.info(SOURCE_FALLBACK).rate is None


def test_rate_info_before_any_fetch():
    service, _ = make_service({})
    info = service.get_rate_info()
    assert info.rate is None
    assert info.last_fetched is None
    assert not info.is_fallback


def test_warm_up_fills_cache():
    service, _ = make_service({"bcrd": FakeHTTPResponse(BCRD_INDICATORS)})

    thread = service.warm_up()
    thread.join(timeout=5)

    assert service.get_rate_info().rate == 59.45


def test_convert_usd_to_dop():
    assert convert_usd_to_dop(100, 58.5) == pytest.approx(5850)
    assert convert_usd_to_dop("100", 58.5) == 0
    assert convert_usd_to_dop(100, float("nan")) == 0


@pytest.mark.parametrize("value", ["NaN", float("nan"), float("inf"), -59.45, 0, "", "n/d", True, None])
def test_usable_rate_rejects_non_positive_or_non_finite(value):
    assert usable_rate(value) is None


def test_usable_rate_accepts_numeric_strings():
    assert usable_rate("59.45") == 59.45


@pytest.mark.parametrize("bad_value", ["NaN", -59.45, "Infinity"])
def test_unusable_primary_rate_falls_through_to_secondary(bad_value):
    service, session = make_service({
        "bcrd": FakeHTTPResponse([{"indicatorName": "Dólar Estadounidense Venta", "value": bad_value}]),
        "exchangerate-api": FakeHTTPResponse({"conversion_rates": {"DOP": 60.0}}),
    })

    assert service.get_rate() == 60.0
    assert len(session.calls) == 2
    assert service.get_rate_info().source == SOURCE_EXCHANGE_RATE_API


@pytest.mark.parametrize("bad_value", ["NaN", -60.0, 0])
def test_unusable_secondary_rate_falls_back(bad_value):
    service, _ = make_service({
        "bcrd": requests.Timeout("timed out"),
        "exchangerate-api": FakeHTTPResponse({"conversion_rates": {"DOP": bad_value}}),
    })

    assert service.get_rate() == Config.FALLBACK_EXCHANGE_RATE
    assert service.get_rate_info().is_fallback
