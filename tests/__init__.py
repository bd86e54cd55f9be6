# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_scenario_inputs, make_form
"""

from .utils import make_form, make_scenario_inputs

__all__ = ["make_scenario_inputs", "make_form"]
