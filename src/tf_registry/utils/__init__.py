"""
Utility modules for the registry clients
"""
from .config_loader import RegistryConfig, load_registry_config

__all__ = [
    'RegistryConfig',
    'load_registry_config',
]
