# Storefront Cart & Pricing Engine

__version__ = "1.0.0"
