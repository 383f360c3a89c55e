"""Builders for the Kubernetes object manifests of a monitoring agent and its cluster sensor."""

__version__ = "0.1.0"