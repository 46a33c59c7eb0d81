"""Observability helpers for kubeimport."""

from kubeimport.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
