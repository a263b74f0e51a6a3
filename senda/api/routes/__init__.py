# Exportar todos los routers
from . import assistant, geocoding, health

__all__ = ["assistant", "geocoding", "health"]
