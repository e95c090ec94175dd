"""Shared helpers for ARR Editor."""
from .editor_config import EditorConfig
from .naming_utils import generate_untitled_name

__all__ = ['EditorConfig', 'generate_untitled_name']
