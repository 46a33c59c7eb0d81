"""Entry point for `python -m kubeimport`.

Usage:
    python -m kubeimport catalog
    python -m kubeimport config
"""

from __future__ import annotations

from kubeimport.cli import cli

cli()
