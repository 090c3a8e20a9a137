"""Idempotent provisioning of an all-in-one OpenShift Origin VM."""

__version__ = "0.1.0"
