from .map_clusters import MapClusterController, region_for_photos

__all__ = ["MapClusterController", "region_for_photos"]
