"""guidelint — linter przykładów kodu w przewodnikach o testach jednostkowych."""

__version__ = "0.1.0"
