"""Modelos y entidades del dominio.

Por qué:
- Aquí viven el modelo de atributos tipados y las entidades genéricas.
- El dominio no conoce HTTP, CLI, ni el formato de cable del broker.
"""

from core.domain.attributes import Attribute, Attributes, Float32
from core.domain.models import ContextEntity, Page

__all__ = ["Attribute", "Attributes", "ContextEntity", "Float32", "Page"]
