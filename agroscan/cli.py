import sys
from dataclasses import dataclass
from typing import Optional

from agroscan.core.config import PERPLEXITY_API_KEY
from agroscan.services.advisor_service import recommend
from agroscan.services.rule_engine import evaluate


@dataclass
class SoilInputs:
    ph: float
    moisture: float
    temperature: Optional[float]
    desired_crop: Optional[str]


def safe_input(prompt: str, default: str) -> str:
    try:
        v = input(f"{prompt} [{default}]: ").strip()
        return v if v != "" else default
    except EOFError:
        return default


def collect_soil_inputs() -> SoilInputs:
    print("=== AgroScan Soil Advisor ===")
    ph = float(safe_input("Soil pH", "6.5"))
    moisture = float(safe_input("Soil moisture (%)", "50"))
    temperature = safe_input("Temperature in C (blank if unknown)", "")
    crop = safe_input("Desired crop (blank for any)", "")
    return SoilInputs(
        ph,
        moisture,
        float(temperature) if temperature else None,
        crop or None
    )


def main():
    soil = collect_soil_inputs()

    print("\n[Stage 1/2] Rule-based soil checks...")
    for advice in evaluate(soil.ph, soil.moisture, soil.temperature):
        print(f"- {advice}")

    if not PERPLEXITY_API_KEY:
        print("\nError: PERPLEXITY_API_KEY environment variable not set.")
        sys.exit(1)

    print("\n[Stage 2/2] Asking the AI agronomist...")
    ai_response = recommend(soil.ph, soil.moisture, soil.temperature, soil.desired_crop)

    print("\n" + "="*80)
    print("AI RECOMMENDATION")
    print("="*80)
    print(ai_response)


if __name__ == "__main__":
    main()
