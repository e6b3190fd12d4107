"""
parkit - client for the parking reservation app.
"""
__version__ = "0.1.0"
