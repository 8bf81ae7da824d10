"""Growth scenario engine — multi-year asset projections under stress scenarios."""
__version__ = "0.1.0"
