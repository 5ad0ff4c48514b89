from .renderer import buffer_to_image

__all__ = ["buffer_to_image"]
