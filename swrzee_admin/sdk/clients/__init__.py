from .admin import AdminClient
from .auth import AuthClient
from .base import BaseClient
from .batches import BatchesClient
from .services import ServicesClient
from .users import UsersClient

__all__ = [
    "AdminClient",
    "AuthClient",
    "BaseClient",
    "BatchesClient",
    "ServicesClient",
    "UsersClient",
]
