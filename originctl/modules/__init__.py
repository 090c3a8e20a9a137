"""
Provisioning modules.
"""
from .models import Stage, ProvisionConfig, ProvisionState, StageResult
from .markers import MarkerStore
from .runner import CommandRunner

__all__ = [
    'Stage',
    'ProvisionConfig',
    'ProvisionState',
    'StageResult',
    'MarkerStore',
    'CommandRunner',
]
