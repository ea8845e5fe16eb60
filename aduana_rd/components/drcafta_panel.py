import streamlit as st

from aduana_rd.calculator.cost_calculator import tax_difference
from aduana_rd.calculator.tariff_rules import DR_CAFTA_TAX_RATE, NON_DR_CAFTA_TAX_RATE, DR_CAFTA_INFO_COUNTRIES
from aduana_rd.services.exchange_rate_service import convert_usd_to_dop
from aduana_rd.utils.formatters import format_usd, format_dop, format_percentage

def render_drcafta_panel(es_dr_cafta, valor_fob_usd, rate=None):
    """Render treaty eligibility with the applied rate and an expandable explanation"""
    if es_dr_cafta is None or valor_fob_usd is None:
        return

    st.markdown("#### Tratado DR-CAFTA")
    if es_dr_cafta:
        st.success(f"✅ Elegible DR-CAFTA ({format_percentage(DR_CAFTA_TAX_RATE)})")
    else:
        st.warning(f"❌ No Elegible DR-CAFTA (Aplica tasa general {format_percentage(NON_DR_CAFTA_TAX_RATE)})")

    with st.expander("Más Info"):
        st.write(
            "El Tratado de Libre Comercio entre República Dominicana, Centroamérica y Estados Unidos "
            "(DR-CAFTA) puede ofrecer tasas arancelarias reducidas para vehículos fabricados en países miembros."
        )
        st.write(
            "Países comúnmente asociados con beneficios para vehículos bajo acuerdos similares "
            f"(verificar elegibilidad específica): {DR_CAFTA_INFO_COUNTRIES}. La elegibilidad final depende "
            "de las regulaciones aduanales vigentes y el origen específico del vehículo."
        )
        if valor_fob_usd > 0:
            difference = tax_difference(valor_fob_usd)
            text = f"Diferencia potencial de impuestos entre tasas: {format_usd(difference)}"
            if rate:
                text += f" ({format_dop(convert_usd_to_dop(difference, rate))})"
            st.caption(text)
