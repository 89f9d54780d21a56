"""Textual host adapter; ``app`` holds the runnable demo and needs ``textual``."""

from .controller import TEXTUAL_KEYS, TextualModalAdapter, TextualUIHooks, translate_key

__all__ = ["TEXTUAL_KEYS", "TextualModalAdapter", "TextualUIHooks", "translate_key"]
