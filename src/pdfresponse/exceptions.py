#!/usr/bin/env python3
"""
PdfResponse Exception Classes
"""

class PdfResponseError(Exception):
    """Base exception for pdfresponse errors"""
    pass

class ConfigError(PdfResponseError):
    """Raised when a document option is malformed or out of range"""
    pass

class StateError(PdfResponseError):
    """Raised when the response cannot proceed in its current state"""
    pass

class RenderError(PdfResponseError):
    """Raised when the renderer fails while writing or finalizing a document"""
    pass
