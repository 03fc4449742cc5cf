"""Uploaders delivering export records to a remote system."""

from .base import Uploader
from .http import HttpUploader

__all__ = ["HttpUploader", "Uploader"]
