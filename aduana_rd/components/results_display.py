from datetime import datetime

import pandas as pd
import streamlit as st

from aduana_rd.calculator.tariff_rules import DR_CAFTA_TAX_RATE, NON_DR_CAFTA_TAX_RATE
from aduana_rd.utils.formatters import format_usd, format_dop, format_percentage

def last_updated_text(minutes_ago):
    """Human readable age of the exchange rate"""
    if minutes_ago is None:
        return ""
    if minutes_ago < 1:
        return "(actualizada hace menos de un minuto)"
    if minutes_ago == 1:
        return "(actualizada hace 1 minuto)"
    return f"(actualizada hace {minutes_ago} minutos)"

def display_amount(amount, show_in_dop):
    """Format a MoneyAmount in the selected currency"""
    if amount is None:
        return format_dop(0) if show_in_dop else format_usd(0)
    return format_dop(amount.dop) if show_in_dop else format_usd(amount.usd)

def breakdown_dataframe(result):
    return pd.DataFrame(result.line_items(), columns=["Concepto", "USD", "DOP"])

def render_calculation_results(result, rate_info=None):
    """Render the calculation results and breakdown"""
    header_col, toggle_col = st.columns([3, 1])
    with header_col:
        st.subheader("Resultados del Cálculo")
    with toggle_col:
        show_in_dop = st.toggle("Mostrar en DOP", key="show_in_dop")

    caption = f"Tasa de cambio utilizada: **1 USD = {float(result.exchange_rate_used):.4f} DOP**"
    if rate_info is not None and rate_info.source:
        source = "Tasa de respaldo" if rate_info.is_fallback else f"Fuente: {rate_info.source}"
        caption += f" ({source}, {last_updated_text(rate_info.minutes_since_fetch(datetime.now()))})"
    st.caption(caption)

    tax_label = f"DR-CAFTA {format_percentage(DR_CAFTA_TAX_RATE)}" if result.es_dr_cafta else f"General {format_percentage(NON_DR_CAFTA_TAX_RATE)}"

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Valor FOB", display_amount(result.valor_fob, show_in_dop))
        st.metric(f"Impuestos Aduanales ({tax_label})", display_amount(result.impuestos, show_in_dop))
    with col2:
        st.metric("Primera Placa y Marbete", display_amount(result.primera_placa, show_in_dop))
        st.metric("**TOTAL ESTIMADO**", display_amount(result.total, show_in_dop), border=True)

    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader("Desglose Detallado")
    with col2:
        breakdown_df = breakdown_dataframe(result)
        csv = breakdown_df.to_csv(index=False)

        st.download_button(
            label="Descargar",
            data=csv,
            file_name="calculo_importacion.csv",
            mime="text/csv"
        )

    st.dataframe(breakdown_df, use_container_width=True, hide_index=True)
