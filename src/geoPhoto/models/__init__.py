from .types import MapRegion, Photo, PhotoGroup

__all__ = ["MapRegion", "Photo", "PhotoGroup"]
