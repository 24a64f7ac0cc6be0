from clientforge.renderer.image_renderer import ImageRenderer

__all__ = ["ImageRenderer"]
