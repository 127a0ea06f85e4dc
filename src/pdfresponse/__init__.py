#!/usr/bin/env python3
"""
pdfresponse
===========

Generate a PDF from HTML or a template in one call.

Modules:
- response: PdfResponse, the adapter callers use
- renderer: renderer capability and the WeasyPrint implementation
- sources: raw HTML and Jinja2 template sources
- preprocess: <style> and comment stripping with BeautifulSoup
- margins / config: option parsing and the render-time snapshot

Usage:
    from pdfresponse import PdfResponse, OutputDestination

    response = PdfResponse('<h1>Hello</h1>')
    response.output_destination = OutputDestination.STRING
    pdf_bytes = response.send()
"""

from .constants import Orientation, OutputDestination, RenderState, WriteMode
from .exceptions import ConfigError, PdfResponseError, RenderError, StateError
from .margins import Margins, parse_margins
from .response import PdfResponse
from .sources import JinjaTemplate, TemplateSource

__all__ = [
    'PdfResponse',
    'Orientation',
    'OutputDestination',
    'RenderState',
    'WriteMode',
    'Margins',
    'parse_margins',
    'TemplateSource',
    'JinjaTemplate',
    'PdfResponseError',
    'ConfigError',
    'StateError',
    'RenderError',
]

__version__ = "1.0.0"
