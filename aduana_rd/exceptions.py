"""Exceptions raised by the import calculator."""


class AduanaError(Exception):
    """Base class for calculator errors."""


class ConfigurationError(AduanaError):
    """A required setting is missing."""


class SelectionError(AduanaError):
    """A vehicle field was set before the fields it depends on."""


class MissingFieldsError(AduanaError):
    """Calculation requested before every required field was filled."""

    def __init__(self, message: str = "Por favor complete todos los campos requeridos."):
        super().__init__(message)
        self.message = message


class CalculationUnavailableError(AduanaError):
    """No cost breakdown could be produced for the selected vehicle."""

    def __init__(self, message: str = "No se pudieron calcular los costos. Verifique los datos del vehículo o intente más tarde."):
        super().__init__(message)
        self.message = message
