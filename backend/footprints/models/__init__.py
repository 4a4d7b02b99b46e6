from footprints.models.trip import Trip

__all__ = ["Trip"]
