"""Static HTML/CSS fragment generation for the marketing component library."""

__version__ = "1.0.0"
