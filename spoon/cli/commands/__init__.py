"""Actions dispatched by the spoon command."""

from .image import build_image, list_images
from .instance import connect_instance, destroy_instance, list_instances

__all__ = [
    'build_image',
    'list_images',
    'connect_instance',
    'destroy_instance',
    'list_instances',
]
