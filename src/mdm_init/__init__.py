"""Bootstrap of the MDM patient-management MongoDB database."""

__version__ = "1.0.0"
