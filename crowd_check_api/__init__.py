"""
Top‑level package for the Crowd Check API.

This file makes ``crowd_check_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``crowd_check_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
