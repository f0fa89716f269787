"""Customer tagging and segmentation engine for restaurant CRM."""

__version__ = "0.1.0"
