"""
devbootstrap: provision a development machine.

Package installation layer: native app bundles, IDE extensions and the
command shims they depend on.
"""

__version__ = "0.1.0"
