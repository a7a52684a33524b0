"""
Top‑level package for the Waste Collection API.

This file makes ``waste_collection_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``waste_collection_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
