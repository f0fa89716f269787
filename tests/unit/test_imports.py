"""
Import validation tests.

Catches missing dependencies or circular imports between the models, services
and utils packages.

Run with: pytest tests/unit/test_imports.py -v
"""

import importlib

import pytest


@pytest.mark.parametrize("module_name", [
    "customer_tagging.config.settings",
    "customer_tagging.models",
    "customer_tagging.services",
    "customer_tagging.services.classifiers",
    "customer_tagging.services.tagging_service",
    "customer_tagging.services.trigger_service",
    "customer_tagging.services.personalization_service",
    "customer_tagging.services.message_service",
    "customer_tagging.services.roster_service",
    "customer_tagging.services.orchestration_service",
    "customer_tagging.utils.logging_config",
    "customer_tagging.utils.error_handling",
    "customer_tagging.utils.stats",
])
def test_module_import(module_name: str):
    """Each module should import without errors."""
    try:
        importlib.import_module(module_name)
    except ImportError as e:
        pytest.fail(f"Failed to import {module_name}: {e}")
