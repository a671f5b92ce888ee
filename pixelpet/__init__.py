"""Pixel Pet: adopt a pet, keep it fed and cheerful, earn coins and artifacts."""

__version__ = "0.3.0"
