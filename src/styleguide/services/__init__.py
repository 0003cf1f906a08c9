"""Collaborators the generator talks to: record mutation, asset storage, password hashing, update signals."""
from .data_handler import DataHandler, SqlDataHandler, is_placeholder, new_placeholder_id
from .passwords import PasswordHasher, SaltedPasswordHasher
from .signals import UpdateSignals
from .storage import AssetStorage, DuplicationBehavior, Folder, LocalStorage

__all__ = [
    "DataHandler",
    "SqlDataHandler",
    "is_placeholder",
    "new_placeholder_id",
    "PasswordHasher",
    "SaltedPasswordHasher",
    "UpdateSignals",
    "AssetStorage",
    "DuplicationBehavior",
    "Folder",
    "LocalStorage",
]
