# compound_access/services/scanner_service.py
import threading
import time
from collections import OrderedDict, deque
from typing import Any, Callable, Deque, List, Optional, Tuple
from sqlalchemy.engine import Connection
from ..config import config
from ..database import DatabaseManager, db_manager
from ..models.enums import AccessMethod, AccessType
from ..models.schemas import RecentScan, ScanResponse
from ..services.access_control import AccessControlService
from ..utils.exceptions import CameraUnavailableError

try:
    import cv2
except ImportError:
    cv2 = None


class ScannerService:
    """Decodes QR frames and runs the resulting credentials through access control."""

    def __init__(
        self,
        access_service: Optional[AccessControlService] = None,
        db: Optional[DatabaseManager] = None,
        decoder: Optional[Callable[[Any], Optional[str]]] = None,
    ):
        self.access_service = access_service or AccessControlService()
        self.db = db or db_manager
        self._decoder = decoder
        self._detector = None

        # worker thread and request handlers both touch the state below
        self._lock = threading.Lock()
        self.recent_scans: Deque[RecentScan] = deque(maxlen=config.SCANNER_RECENT_LIMIT)
        self.last_result: Optional[ScanResponse] = None

        # ----------------------------------------------------------------------
        # Debounce cache
        # ----------------------------------------------------------------------
        # key = (payload text, access type)
        # value = (timestamp, ScanResponse)
        # A QR held in front of the camera decodes on every frame.
        self._scan_cache: "OrderedDict[tuple, Tuple[float, ScanResponse]]" = OrderedDict()
        self._scan_cache_ttl = config.SCANNER_DEBOUNCE_SECONDS
        self._scan_cache_max = 128

    # ----------------------------------------------------------------------
    # Cache helpers
    # ----------------------------------------------------------------------
    def _get_cached_decision(self, key: tuple) -> Optional[ScanResponse]:
        """Return cached decision if still valid."""
        with self._lock:
            item = self._scan_cache.get(key)
            if not item:
                return None

            ts, decision = item
            if time.monotonic() - ts > self._scan_cache_ttl:
                self._scan_cache.pop(key, None)
                return None

            self._scan_cache.move_to_end(key)
            return decision

    def _store_decision(self, key: tuple, decision: ScanResponse) -> None:
        """Store decision with timestamp and trim cache size."""
        with self._lock:
            self._scan_cache[key] = (time.monotonic(), decision)
            while len(self._scan_cache) > self._scan_cache_max:
                self._scan_cache.popitem(last=False)

    # ----------------------------------------------------------------------
    # Decoding
    # ----------------------------------------------------------------------
    def decode_frame(self, frame) -> Optional[str]:
        """Return the QR text found in a BGR frame, or None."""
        if self._decoder is not None:
            return self._decoder(frame) or None

        if cv2 is None:
            raise CameraUnavailableError("OpenCV is not installed")

        if self._detector is None:
            self._detector = cv2.QRCodeDetector()

        data, _points, _straight = self._detector.detectAndDecode(frame)
        return data or None

    # ----------------------------------------------------------------------
    # Core request handler
    # ----------------------------------------------------------------------
    def process_payload(
        self,
        conn: Connection,
        raw: str,
        access_type: AccessType = "entry",
        method: AccessMethod = "qr_code",
        location: Optional[str] = None,
        security_personnel: Optional[str] = None,
    ) -> ScanResponse:
        result, message, resident, log = self.access_service.process_credential(
            conn, raw, access_type, location, security_personnel, method
        )

        response = ScanResponse(
            result=result,
            message=message,
            accessType=access_type,
            resident=resident,
            log=log,
        )

        with self._lock:
            self.last_result = response
            if result == "success" and resident is not None and log is not None:
                self.recent_scans.appendleft(
                    RecentScan(resident=resident, timestamp=log.timestamp, accessType=access_type)
                )

        return response

    def process_frame(self, frame, access_type: AccessType = "entry") -> Optional[ScanResponse]:
        """Decode one camera frame; returns None when the frame holds no QR code."""
        raw = self.decode_frame(frame)
        if not raw:
            return None

        cache_key = (raw, access_type)
        cached = self._get_cached_decision(cache_key)
        if cached is not None:
            return cached

        with self.db.get_connection() as conn:
            response = self.process_payload(conn, raw, access_type)

        if config.API_DEBUG:
            print(f"[scanner] {response.result}: {response.message}")

        self._store_decision(cache_key, response)
        return response

    # ----------------------------------------------------------------------
    # Status
    # ----------------------------------------------------------------------
    def snapshot(self) -> Tuple[Optional[ScanResponse], List[RecentScan]]:
        with self._lock:
            return self.last_result, list(self.recent_scans)
