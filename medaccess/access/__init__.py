"""Access governance state: grant relation and request cooldowns."""

from medaccess.access.access_registry import AccessRegistry
from medaccess.access.cooldown import CooldownTracker

__all__ = ["AccessRegistry", "CooldownTracker"]
