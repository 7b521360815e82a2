"""Services for wtt."""

from .populate_service import PopulateService
from .registry_service import RepositoryRegistry, default_config_dir
from .selection_service import SelectionService

__all__ = [
    "PopulateService",
    "RepositoryRegistry",
    "default_config_dir",
    "SelectionService",
]
