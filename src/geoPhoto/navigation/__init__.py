from .focus import FocusStore, focus_region

__all__ = ["FocusStore", "focus_region"]
