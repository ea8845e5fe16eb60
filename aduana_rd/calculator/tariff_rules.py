"""
Modular tariff rules configuration
Easy to modify when DGA business rules change
"""

# DR-CAFTA eligible countries of manufacture, uppercased spellings as stored in the vehicle table
DR_CAFTA_COUNTRIES = ["ESTADOS UNIDOS", "USA", "UNITED STATES", "CANADA", "CANADÁ"]

# Countries listed in the eligibility info text
DR_CAFTA_INFO_COUNTRIES = (
    "Estados Unidos, Canadá, y países de Centroamérica como Costa Rica, El Salvador, "
    "Guatemala, Honduras, Nicaragua, además de República Dominicana"
)

# Insurance loading applied to the reference value when computing FOB
FOB_INSURANCE_PERCENTAGE = 0.02

# Customs tax rates applied to FOB
DR_CAFTA_TAX_RATE = 0.18
NON_DR_CAFTA_TAX_RATE = 0.2985

# First-plate registration rate on FOB. Equal to DR_CAFTA_TAX_RATE today but an unrelated fee.
FIRST_PLATE_TAX_RATE_GENERAL = 0.18

# Marbete (annual sticker) in DOP, tiered by vehicle age
MARBETE_UNDER_5_YEARS = 3000
MARBETE_5_YEARS_OR_OLDER = 1500
MARBETE_AGE_THRESHOLD = 5

# Oldest manufacture year accepted by the calculator (exclusive)
MIN_MANUFACTURE_YEAR = 1900
