"""
Image capability.
"""

from bigmodel_python.image.client import generate_image

__all__ = ["generate_image"]
