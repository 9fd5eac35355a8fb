# =======================================================================================
# compound_access/__init__.py - Package Initialization
# =======================================================================================
"""
Compound Access - Residential Compound Administration

Resident directory, QR access credentials and gate access logging for a
residential compound, served as a JSON API for the admin dashboard.
"""

__version__ = "1.0.0"
__author__ = "Compound Access Team"
