"""
Backend access for EduNexus Core
Remote store client and storage configuration
"""
from .config_manager import StorageConfig, load_config
from .remote_client import RemoteStoreClient

__all__ = [
    'StorageConfig',
    'load_config',
    'RemoteStoreClient',
]
