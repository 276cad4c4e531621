"""Camera module for view and ray generation.

Components:
    thin_lens: Perspective camera with aperture-driven depth of field

Camera responsibilities:
    - Transform (s, t) image coordinates to world-space rays
    - Sample the lens disk for depth of field
    - Support look-at positioning with up vector

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera, CameraConfig, setup_camera

__all__ = [
    "Camera",
    "CameraConfig",
    "setup_camera",
]
