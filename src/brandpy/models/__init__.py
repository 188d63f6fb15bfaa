"""Data models for BrandPy."""

from brandpy.models.config import AppConfig, Auth0Config
from brandpy.models.user import UserFields, UserRecord

__all__ = [
    # User models
    "UserRecord",
    "UserFields",
    # Config models
    "Auth0Config",
    "AppConfig",
]
