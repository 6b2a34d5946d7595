# Export all catalog models for easy imports
from .base import Base
from .listing import StoredListing
from .drop import StoredDrop
from .buyer import StoredBuyer

__all__ = [
    "Base",
    "StoredListing",
    "StoredDrop",
    "StoredBuyer",
]
