from .viewer_service import ViewerSession

__all__ = ["ViewerSession"]
