"""Grid pricing module."""

from .tariff import PricingBand, TOUPricingPolicy, default_bands

__all__ = ["PricingBand", "TOUPricingPolicy", "default_bands"]
