"""
Test configuration and shared fixtures for pdfresponse tests
"""
import os
import sys
import pytest
import tempfile
import shutil
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from pdfresponse.constants import OutputDestination, WriteMode


class FakeRenderer:
    """Renderer double that records every call."""

    def __init__(self, pdf_bytes=b'%PDF-1.7 fake'):
        self.pdf_bytes = pdf_bytes
        self.bidirectional = False
        self.author = None
        self.title = None
        self.display_mode = None
        self.writes = []
        self.scripts = []
        self.outputs = []

    def set_author(self, author):
        self.author = author

    def set_title(self, title):
        self.title = title

    def set_display_mode(self, zoom, layout):
        self.display_mode = (zoom, layout)

    def set_js(self, script):
        self.scripts.append(script)

    def write_html(self, html, mode=WriteMode.DEFAULT):
        self.writes.append((html, mode))

    def output(self, name, destination):
        self.outputs.append((name, destination))
        if destination is OutputDestination.STRING:
            return self.pdf_bytes
        return None


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def make_response(fake_renderer):
    """Build a PdfResponse wired to the fake renderer"""
    from pdfresponse.response import PdfResponse

    def _make(source='<html><body><p>Hello</p></body></html>', **options):
        response = PdfResponse(source)
        response.create_renderer = lambda: fake_renderer
        response.output_destination = OutputDestination.STRING
        for key, value in options.items():
            setattr(response, key, value)
        return response

    return _make


@pytest.fixture
def styled_html():
    """HTML document carrying embedded styles and comments"""
    return """
    <html>
        <head>
            <title>Styled</title>
            <style>color:red</style>
        </head>
        <body>
            <!-- a comment
                 spanning lines -->
            <p>Keep this text</p>
            <!--mpdf <p>Renderer only</p> mpdf-->
            <style>p { font-weight: bold }</style>
            <div style="margin: 0">Sibling text</div>
        </body>
    </html>
    """
