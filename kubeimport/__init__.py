"""kubeimport: client configuration and importable resource catalog for one cluster."""

__version__ = "0.1.0"
