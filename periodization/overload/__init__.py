"""Biomechanical overload: risk detection, correctives, load management."""

from periodization.overload.detector import categorize_risk_level, detect_overload_risks, estimate_time_to_injury
from periodization.overload.load_management import create_load_management_strategy
from periodization.overload.protocols import generate_corrective_protocols
from periodization.overload.regions import BODY_REGIONS, BodyRegion

__all__ = [
    "BODY_REGIONS",
    "BodyRegion",
    "categorize_risk_level",
    "create_load_management_strategy",
    "detect_overload_risks",
    "estimate_time_to_injury",
    "generate_corrective_protocols",
]
