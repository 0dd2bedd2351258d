"""MiniMax adapter package."""

from .client import MiniMaxProvider, minimax_base_url

__all__ = ["MiniMaxProvider", "minimax_base_url"]
