# =======================================================================================
# compound_access/workers/__init__.py - Workers Package
# =======================================================================================
from .scanner_worker import ScannerWorker, scanner_worker, stop_scanner_worker

__all__ = ["ScannerWorker", "scanner_worker", "stop_scanner_worker"]
