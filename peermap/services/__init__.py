from .response_map_views import ResponseMapViews

__all__ = ['ResponseMapViews']
