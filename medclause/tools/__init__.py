"""Tools module - external search integrations."""

from .video_search import VideoSearchTool

__all__ = ['VideoSearchTool']
