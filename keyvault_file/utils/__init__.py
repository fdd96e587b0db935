"""Utility helpers."""

from keyvault_file.utils.file import LocalFileSystem

__all__ = ["LocalFileSystem"]
