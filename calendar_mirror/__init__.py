"""One- or two-way event mirroring between Google Calendar accounts by CORE SYSTEMS."""

__version__ = "1.0.0"
