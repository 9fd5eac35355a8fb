# =======================================================================================
# compound_access/workers/scanner_worker.py - Background Camera Scanner
# =======================================================================================
import threading
from typing import Callable, Optional
from ..config import config
from ..models.enums import AccessType, ScannerState
from ..models.schemas import ScannerStatusResponse, ScanResponse
from ..services.scanner_service import ScannerService
from ..utils.exceptions import CameraUnavailableError
from .camera import CameraSource

CAMERA_DENIED_MESSAGE = "Camera access denied. Please enable camera permissions."


class ScannerWorker:
    """Background worker polling the gate camera for QR credentials."""

    def __init__(
        self,
        scanner_service: Optional[ScannerService] = None,
        camera_factory: Callable[[str], CameraSource] = CameraSource,
        source: Optional[str] = None,
        poll_interval: Optional[float] = None,
    ):
        self.scanner_service = scanner_service or ScannerService()
        self.camera_factory = camera_factory
        self.source = source if source is not None else config.SCANNER_CAMERA_SOURCE
        self.poll_interval = poll_interval if poll_interval is not None else config.SCANNER_POLL_INTERVAL

        self.running = False
        self.state = ScannerState.IDLE
        self.access_type: AccessType = "entry"
        self.error: Optional[str] = None

        self._camera: Optional[CameraSource] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self.join_timeout = max(2.0, self.poll_interval * 5)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Start / Stop
    # ------------------------------------------------------------------
    def start(self, access_type: AccessType = "entry") -> bool:
        """Open the camera and start polling in a background thread."""
        with self._lock:
            self.access_type = access_type
            if self.running:
                return True

            reason = self._unavailable_reason()
            if reason:
                self._fail(reason)
                return False

            camera = self.camera_factory(self.source)
            try:
                camera.open()
            except CameraUnavailableError as e:
                if config.API_DEBUG:
                    print(f"[scanner] Camera error: {e}")
                self._fail(CAMERA_DENIED_MESSAGE)
                return False

            self._camera = camera
            self.running = True
            self.state = ScannerState.SCANNING
            self.error = None

            # each run gets its own stop flag; the loop thread owns and releases its camera
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run_loop, args=(camera, self._stop_event), daemon=True
            )
            self._thread.start()

        if config.API_DEBUG:
            print(f"[scanner] Worker started on {self.source} ({access_type})")
        return True

    def stop(self) -> None:
        """Stop polling; the camera is released by the loop thread once it exits."""
        with self._lock:
            self.running = False
            thread, self._thread = self._thread, None
            stop_event, self._stop_event = self._stop_event, None
            camera, self._camera = self._camera, None

        if stop_event is not None:
            stop_event.set()

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.join_timeout)
            if thread.is_alive() and config.API_DEBUG:
                print("[scanner] Loop still blocked on a frame read, camera released when it returns")
        elif thread is None and camera is not None:
            camera.release()

        with self._lock:
            self.state = ScannerState.IDLE
            self.error = None

        if config.API_DEBUG:
            print("[scanner] Worker stopped")

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------
    def _unavailable_reason(self) -> Optional[str]:
        if not self.source:
            return "No camera source configured"
        available = getattr(self.camera_factory, "available", None)
        if available is not None and not available():
            return "OpenCV is not installed"
        return None

    def _fail(self, message: str) -> None:
        self.state = ScannerState.ERROR
        self.error = message
        if config.API_DEBUG:
            print(f"[scanner] {message}")

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def poll_once(self, camera: Optional[CameraSource] = None) -> Optional[ScanResponse]:
        """Read and process a single frame."""
        camera = camera or self._camera
        if camera is None:
            return None

        ok, frame = camera.read()
        if not ok:
            return None

        return self.scanner_service.process_frame(frame, self.access_type)

    def _run_loop(self, camera: CameraSource, stop_event: threading.Event) -> None:
        try:
            while not stop_event.is_set():
                try:
                    self.poll_once(camera)
                except Exception as e:
                    if config.API_DEBUG:
                        print(f"[scanner] Error: {e}")
                stop_event.wait(self.poll_interval)
        finally:
            camera.release()

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    def status(self) -> ScannerStatusResponse:
        last_result, recent = self.scanner_service.snapshot()
        return ScannerStatusResponse(
            state=self.state,
            accessType=self.access_type,
            cameraSource=self.source,
            error=self.error,
            lastResult=last_result,
            recentScans=recent,
        )

# ----------------------------------------------------------------------
# Global instance + entrypoint
# ----------------------------------------------------------------------
scanner_worker = ScannerWorker()


def stop_scanner_worker():
    """Called from FastAPI shutdown."""
    if scanner_worker.running:
        scanner_worker.stop()
