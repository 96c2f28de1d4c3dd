"""
Top‑level package for the Beacon API.

This file makes ``beacon_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``beacon_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
