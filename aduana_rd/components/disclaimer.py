import streamlit as st

DISCLAIMER_MARKDOWN = """
**⚠️ IMPORTANTE - LEER ANTES DE USAR**

**Valores Aproximados**

Los cálculos mostrados son **estimaciones aproximadas** basadas en la base de datos oficial de la DGA.
Los valores reales pueden variar según condiciones específicas, fluctuaciones del mercado y otros
factores no contemplados en esta calculadora.

**Herramienta de Apoyo No Oficial**

- 🔹 Esta calculadora es una **herramienta de apoyo** independiente
- 🔹 **NO tiene relación oficial** con la Dirección General de Aduanas (DGA)
- 🔹 Los resultados **no constituyen** cotizaciones oficiales ni documentos válidos para trámites aduaneros

**Limitaciones Adicionales**

- 📋 Las tasas de cambio se actualizan periódicamente pero pueden no reflejar el valor exacto al momento del trámite
- 📋 Los costos de flete son estimaciones generales que pueden variar según origen, naviera y condiciones específicas
- 📋 Los montos de primera placa pueden variar según especificaciones técnicas exactas del vehículo

Para obtener cotizaciones exactas y oficiales, consulte siempre directamente con la DGA.
"""

def render_disclaimer():
    with st.expander("Aviso Legal"):
        st.markdown(DISCLAIMER_MARKDOWN)
