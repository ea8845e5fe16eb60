import inspect
from datetime import datetime, timedelta

import pytest
import streamlit as st

from aduana_rd.calculator.cost_calculator import compute_total
from aduana_rd.components.results_display import breakdown_dataframe, display_amount, last_updated_text
from aduana_rd.models.import_models import MoneyAmount, RateInfo


@pytest.mark.parametrize("minutes, expected", [
    (None, ""),
    (0, "(actualizada hace menos de un minuto)"),
    (1, "(actualizada hace 1 minuto)"),
    (42, "(actualizada hace 42 minutos)"),
])
def test_last_updated_text(minutes, expected):
    assert last_updated_text(minutes) == expected


def test_minutes_since_fetch():
    fetched = datetime(2026, 10, 19, 12, 0)
    info = RateInfo(rate=58.5, last_fetched=fetched, source="BCRD")

    assert info.minutes_since_fetch(fetched + timedelta(minutes=15, seconds=10)) == 15
    assert RateInfo(rate=None, last_fetched=None).minutes_since_fetch(fetched) is None


def test_display_amount_switches_currency():
    amount = MoneyAmount(usd=1234.5, dop=72218.25)

    assert display_amount(amount, show_in_dop=False) == "$1,234.50"
    assert display_amount(amount, show_in_dop=True) == "RD$72,218.25"
    assert display_amount(None, show_in_dop=True) == "RD$0.00"


def test_breakdown_dataframe():
    result = compute_total(20000, 800, "USA", 2023, 58.5)

    df = breakdown_dataframe(result)

    assert list(df.columns) == ["Concepto", "USD", "DOP"]
    assert list(df["Concepto"]) == ["Valor FOB", "Impuestos Aduanales", "Primera Placa y Marbete", "Total Estimado"]
    assert df.loc[0, "USD"] == 21200.0
    assert df.loc[0, "DOP"] == 1240200.0
    assert "Total Estimado" in df.to_csv(index=False)


def test_installed_streamlit_supports_bordered_metrics():
    assert "border" in inspect.signature(st.metric).parameters
