"""kubeimport command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``kubeimport`` script).
"""

from kubeimport.cli.main import cli

__all__ = ["cli"]
