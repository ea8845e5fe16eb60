from loguru import logger

from aduana_rd.calculator.form_state import CalculatorController
from aduana_rd.exceptions import AduanaError
from aduana_rd.models.import_models import SELECTION_FIELDS
from aduana_rd.services.cache_service import RateCache
from aduana_rd.services.exchange_rate_service import ExchangeRateService
from aduana_rd.services.vehicle_gateway import VehicleGateway
from aduana_rd.utils.formatters import format_usd, format_dop, format_percentage
from aduana_rd.utils.logging_utils import setup_logger, log_system_startup, log_system_error

PROMPTS = {
    "marca": "Marca",
    "modelo": "Modelo",
    "especificacion": "Especificación",
    "ano": "Año de fabricación",
    "pais": "País de fabricación",
}

def setup_logging():
    """Configure logging settings with proper initialization."""
    try:
        setup_logger("aduana_rd")
        log_system_startup("DR Vehicle Import Calculator")
        return True
    except Exception as e:
        print(f"Failed to setup logging: {e}")
        return False

def choose(controller, field):
    """Prompt until a listed option is chosen. Returns None when the user quits."""
    options = controller.options_for(field)
    if not options:
        print(f"No hay opciones disponibles para {PROMPTS[field]}.")
        return None

    for i, option in enumerate(options, 1):
        print(f"  {i}. {option}")

    while True:
        answer = input(f"{PROMPTS[field]} (número o 'quit'): ").strip()
        if answer.lower() == 'quit':
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        print("Por favor elija un número de la lista")

def print_results(result):
    rate = result.exchange_rate_used
    treaty = "DR-CAFTA" if result.es_dr_cafta else "General"
    print("\nResultados del Cálculo")
    print("-" * 60)
    print(f"Tasa de cambio: 1 USD = {rate:.4f} DOP")
    for label, amount in [
        ("Valor FOB", result.valor_fob),
        (f"Impuestos ({treaty})", result.impuestos),
        ("Primera Placa y Marbete", result.primera_placa),
        ("TOTAL ESTIMADO", result.total),
    ]:
        print(f"{label:<28} {format_usd(amount.usd):>16} {format_dop(amount.dop):>20}")
    if result.porcentaje_impuesto is not None:
        print(f"Porcentaje de impuesto: {format_percentage(float(result.porcentaje_impuesto))}")
    print("-" * 60)

def run_search(controller):
    """One full search. Returns False when the user asked to quit."""
    for field in SELECTION_FIELDS:
        value = choose(controller, field)
        if value is None:
            return False
        controller.select(field, value)

    if controller.form.valor_referencia is None:
        print("No se encontró un valor de referencia exacto para este vehículo.")

    controller.form.set_costo_flete(input("Costo de flete (USD): ").strip())
    try:
        result = controller.calculate()
    except AduanaError as e:
        print(getattr(e, "message", str(e)))
        return True

    print_results(result)
    return True

def main():
    """Main entry point for the terminal calculator."""
    if not setup_logging():
        print("Warning: Logging setup failed, continuing without proper logging")

    try:
        rate_service = ExchangeRateService(cache=RateCache())
        rate_service.warm_up()
        controller = CalculatorController(VehicleGateway(), rate_service)
    except AduanaError as e:
        log_system_error("System", str(e))
        print(f"Error initializing system: {str(e)}")
        return

    print("\nCalculadora de Impuestos de Vehículos - RD")
    print("Enter 'quit' at any prompt to exit\n")

    while True:
        if not run_search(controller):
            logger.info("User requested shutdown")
            break
        again = input("\n¿Nueva búsqueda? (y/n): ").strip().lower()
        if again != 'y':
            break
        controller.new_search()

if __name__ == "__main__":
    main()
