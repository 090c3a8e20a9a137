from . import provision, status, reset, verify, manifests

__all__ = ['provision', 'status', 'reset', 'verify', 'manifests']
