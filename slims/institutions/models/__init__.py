from .institution import Faculty, Department, PlacementOrganization

__all__ = ["Faculty", "Department", "PlacementOrganization"]
