"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Pure exchange logic (reconciliation, the stage machine,
the vote tally and the view projector) lives in ``services`` next to
the command services that drive it; HTTP concerns live in
``api/v1/endpoints``; persistence and configuration live in ``core``.
"""

from .main import app  # noqa: F401
