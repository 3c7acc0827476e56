"""Builders, filters, quantity parsing and pluggable clients for Kubernetes containers, events, PVs and PVCs."""

__version__ = "0.1.0"

__all__ = [
    "container",
    "event",
    "kubeclient",
    "persistentvolume",
    "persistentvolumeclaim",
    "pvcclient",
    "pvclient",
    "quantity",
]