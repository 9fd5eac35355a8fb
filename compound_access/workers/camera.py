# =======================================================================================
# compound_access/workers/camera.py - OpenCV Camera Source
# =======================================================================================
from typing import Optional, Union
from ..utils.exceptions import CameraUnavailableError

try:
    import cv2
except ImportError:
    cv2 = None


class CameraSource:
    """Frame source backed by cv2.VideoCapture.

    `source` is either a local device index ("0") or a stream URL
    (rtsp://..., http://...).
    """

    def __init__(self, source: str):
        self.source = source
        self.capture: Optional["cv2.VideoCapture"] = None

    @staticmethod
    def available() -> bool:
        return cv2 is not None

    @staticmethod
    def _resolve(source: str) -> Union[int, str]:
        return int(source) if source.isdigit() else source

    def open(self) -> None:
        if cv2 is None:
            raise CameraUnavailableError("OpenCV is not installed")
        if self.capture is None:
            self.capture = cv2.VideoCapture(self._resolve(self.source))
        if not self.capture.isOpened():
            self.release()
            raise CameraUnavailableError(f"Failed to open camera: {self.source}")

    def read(self):
        """Return (ok, frame) for the next frame in BGR format."""
        if self.capture is None:
            raise CameraUnavailableError("Camera not opened. Call open() first.")
        return self.capture.read()

    def release(self) -> None:
        if self.capture is not None:
            self.capture.release()
            self.capture = None
