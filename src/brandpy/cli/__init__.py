"""CLI module for BrandPy user administration."""

from .commands import OperationHandler
from .main import AliasedGroup, cli, main
from .prompts import prompt_new_user, prompt_user_update

__all__ = [
    "AliasedGroup",
    "OperationHandler",
    "cli",
    "main",
    "prompt_new_user",
    "prompt_user_update",
]
