"""Career-Match: quiz scoring and career matching pipeline."""

__version__ = "0.1.0"
