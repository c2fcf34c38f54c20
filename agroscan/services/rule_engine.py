from typing import List, Optional

# Basic level
ACIDIC = "Soil is acidic. Add lime to balance pH."
ALKALINE = "Soil is alkaline. Add sulfur or compost."
PH_OK = "Soil pH is good for most crops."

DRY = "Soil is dry. Irrigation is recommended."
WET = "Soil is wet. Avoid overwatering."
MOISTURE_OK = "Soil moisture is in a healthy range."

COLD = "Temperature is low. Frost protection may be needed."
HOT = "Temperature is high. Provide shade or extra water."
TEMPERATURE_OK = "Temperature is suitable for most crops."

# Advanced level
VERY_ACIDIC = "Very acidic soil. Apply lime generously, monitor crop growth."
STRONGLY_ALKALINE = "Strongly alkaline soil. Consider gypsum or acidifying organic matter."
EXTREMELY_DRY = "Extremely dry soil. Use mulching and drip irrigation to conserve water."
ROOT_ROT = "Excess water can cause root rot. Improve drainage or raised beds."
COLD_STRESS = "Severe cold stress. Use row covers or greenhouses for sensitive crops."
HEAT_STRESS = "Heat stress likely. Use shade nets and frequent irrigation."

# Scientific level
NUTRIENT_WARNING = "Nutrient availability may be limited. Conduct soil NPK test."
PEST_WARNING = (
    "High humidity and heat can increase pest/fungal disease risk. "
    "Monitor closely and consider IPM strategies."
)
OPTIMAL_CROPS = "Conditions are optimal for crops like wheat, rice, maize, and vegetables."


def _basic(ph: float, moisture: float, temperature: Optional[float]) -> List[str]:
    advice = []

    if ph < 6:
        advice.append(ACIDIC)
    elif ph > 8:
        advice.append(ALKALINE)
    else:
        advice.append(PH_OK)

    if moisture < 30:
        advice.append(DRY)
    elif moisture > 70:
        advice.append(WET)
    else:
        advice.append(MOISTURE_OK)

    if temperature is not None:
        if temperature < 15:
            advice.append(COLD)
        elif temperature > 35:
            advice.append(HOT)
        else:
            advice.append(TEMPERATURE_OK)

    return advice


def _advanced(ph: float, moisture: float, temperature: Optional[float]) -> List[str]:
    advice = []

    if ph < 5.5:
        advice.append(VERY_ACIDIC)
    elif ph > 8.5:
        advice.append(STRONGLY_ALKALINE)

    if moisture < 20:
        advice.append(EXTREMELY_DRY)
    elif moisture > 80:
        advice.append(ROOT_ROT)

    if temperature is not None:
        if temperature < 10:
            advice.append(COLD_STRESS)
        elif temperature > 40:
            advice.append(HEAT_STRESS)

    return advice


def _scientific(ph: float, moisture: float, temperature: Optional[float]) -> List[str]:
    advice = []

    if ph < 6 or ph > 8:
        advice.append(NUTRIENT_WARNING)

    if temperature is not None and ((moisture > 70 and temperature > 30) or temperature > 35):
        advice.append(PEST_WARNING)

    if 6 <= ph <= 7.5 and 30 <= moisture <= 70:
        advice.append(OPTIMAL_CROPS)

    return advice


def evaluate(ph: float, moisture: float, temperature: Optional[float] = None) -> List[str]:
    """
    Progressive soil advisory: basic, then advanced, then scientific checks.

    ph and moisture must be supplied by the caller. A missing temperature
    skips every temperature rule instead of failing.
    """
    return (
        _basic(ph, moisture, temperature)
        + _advanced(ph, moisture, temperature)
        + _scientific(ph, moisture, temperature)
    )
