from .pages import Page
from .be_groups import BackendGroup
from .be_users import BackendUser

__all__ = ["Page", "BackendGroup", "BackendUser"]
