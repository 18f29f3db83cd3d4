"""Review assignment mappings for peer assessment."""

__version__ = '0.1.0'
