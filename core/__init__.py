# Core module exports
from .types import *
from .exceptions import *

__all__ = [
    'EnvelopeKind',
    'PageMeta',
    'ListResult',
    'ShopAdminError',
    'ApiError',
    'NetworkError',
    'ValidationError',
    'NotFoundError',
    'AuthenticationError',
    'StorageError',
    'ConfigurationError'
]
