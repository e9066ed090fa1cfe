# agent_cognition/curiosity/__init__.py
"""
Curiosity: intrinsic motivation while idle.
"""

from .explorer import CuriosityConfig, CuriosityExplorer, ExplorationResult

__all__ = ["CuriosityExplorer", "CuriosityConfig", "ExplorationResult"]
