"""
Gestor Pricing Engine
=======================
Direct and marketplace price simulation.
"""

from engines.pricing.calculator import DIRECT_CHANNEL, PricingResult, calculate_pricing
from engines.pricing.services import PricingService

__all__ = [
    "DIRECT_CHANNEL",
    "PricingResult",
    "PricingService",
    "calculate_pricing",
]
