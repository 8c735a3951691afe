"""
Video capability.
"""

from bigmodel_python.video.client import generate_video, submit_video_generation

__all__ = ["generate_video", "submit_video_generation"]
