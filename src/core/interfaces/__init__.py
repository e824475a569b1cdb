"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan las entidades del llamador.
- El cliente del broker depende de estas abstracciones, nunca de clases concretas.
"""

from core.interfaces.entity import Entity, EntityFactory

__all__ = ["Entity", "EntityFactory"]
