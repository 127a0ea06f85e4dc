#!/usr/bin/env python3
"""
PdfResponse
===========

Turns an HTML string or a template into a PDF in one call::

    response = PdfResponse(html)
    response.document_title = 'Quarterly report'
    response.output_destination = OutputDestination.STRING
    pdf_bytes = response.send()

Layout, fonts and pagination are left entirely to the renderer (WeasyPrint by
default). The response only configures it, prepares the HTML and decides where
the finished document goes.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .config import DocumentConfig, build_config, check_display_mode
from .constants import EMPTY_DOCUMENT, Orientation, OutputDestination, RenderState, WriteMode
from .exceptions import ConfigError, PdfResponseError, RenderError, StateError
from .margins import Margins, parse_margins
from .preprocess import HtmlDom, strip_styles
from .renderer import Renderer, WeasyRenderer, is_renderer
from .sources import resolve_source
from .utils import try_call, webalize


class PdfResponse:
    """Configures a renderer and sends one document to its destination.

    Every option is a plain attribute; set them before calling ``send()``.
    An instance renders exactly one document: after ``send()`` succeeds or
    fails it cannot be sent again.
    """

    def __init__(self, source: Any):
        self.logger = logging.getLogger(__name__)
        self._source = source

        self.page_orientation: Union[Orientation, str] = Orientation.PORTRAIT
        # A0-A10, B0-B10, C0-C10, Letter, Legal, ... (suffix "-L" forces landscape)
        self.page_format = 'A4'
        # top,right,bottom,left,header,footer in millimetres
        self.page_margins = '16,15,16,15,9,9'
        self.document_author = 'pdfresponse'
        self.document_title = 'Unnamed document'
        # fullpage | fullwidth | real | default | integer percentage
        self.display_zoom: Union[str, int] = 'default'
        # single | continuous | two | default
        self.display_layout = 'continuous'
        self.temp_dir: Optional[str] = None
        self.multi_language = False
        self.styles = ''
        self.ignore_styles_in_html = False
        self.base_url: Optional[str] = None

        self.output_name: Optional[str] = None
        self.output_destination: Union[OutputDestination, str] = OutputDestination.INLINE
        self.output_stream = None

        self.dom_options: Dict[str, Any] = {}
        self.create_renderer: Optional[Callable[[], Renderer]] = self.create_pdf_renderer
        self.on_before_write: List[Callable] = []
        self.on_before_complete: List[Callable] = []

        self._renderer: Optional[Renderer] = None
        self.state = RenderState.UNINITIALIZED

    @classmethod
    def from_config(cls, source: Any, config: Dict[str, Any]) -> 'PdfResponse':
        """Create a response with options taken from the ``pdf`` config section."""
        response = cls(source)
        pdf = config.get('pdf', {})
        response.page_format = pdf.get('page_format', response.page_format)
        response.page_orientation = pdf.get('orientation', response.page_orientation)
        response.page_margins = pdf.get('margins', response.page_margins)
        response.document_author = pdf.get('author', response.document_author)
        response.display_zoom = pdf.get('display_zoom', response.display_zoom)
        response.display_layout = pdf.get('display_layout', response.display_layout)
        response.temp_dir = pdf.get('temp_dir', response.temp_dir)
        response.multi_language = bool(pdf.get('multi_language', response.multi_language))
        response.ignore_styles_in_html = bool(pdf.get('ignore_styles_in_html', response.ignore_styles_in_html))
        return response

    # Options

    def get_margins(self) -> Margins:
        return parse_margins(self.page_margins)

    def build_config(self) -> DocumentConfig:
        return build_config(self)

    @property
    def headers(self) -> Dict[str, str]:
        """HTTP headers for serving the document inline or as a download."""
        name = self.output_name or self.default_output_name()
        destination = self.get_output_destination()
        disposition = 'attachment' if destination is OutputDestination.DOWNLOAD else 'inline'
        return {
            'Content-Type': 'application/pdf',
            'Content-Disposition': f'{disposition}; filename="{name}"',
        }

    def get_output_destination(self) -> OutputDestination:
        try:
            return OutputDestination.parse(self.output_destination)
        except ValueError:
            raise ConfigError(f"Unknown output destination: {self.output_destination!r}") from None

    def default_output_name(self) -> str:
        return webalize(self.document_title) + '.pdf'

    # Source

    def get_raw_source(self) -> Any:
        if self._source is None or (not isinstance(self._source, str) and not self._source):
            raise StateError('Source is not defined!')
        return self._source

    def get_source(self) -> str:
        """Resolve the source to HTML, injecting this response into templates."""
        return resolve_source(self.get_raw_source(), self, self.get_renderer)

    # Renderer

    def create_pdf_renderer(self) -> Renderer:
        """Default renderer factory."""
        config = self.build_config()
        self.logger.info(f"Creating renderer: {config.page_format} {config.orientation.name.lower()}")
        return WeasyRenderer(config, stream=self.output_stream)

    def create_dom(self) -> HtmlDom:
        return HtmlDom(self.dom_options or {'remove_styles': False})

    def get_renderer(self) -> Renderer:
        """Return the renderer, creating it on first use."""
        if self._renderer is None:
            factory = self.create_renderer
            if not callable(factory):
                raise StateError('Callback create_renderer is not callable!')
            renderer = factory()
            if not is_renderer(renderer):
                raise StateError(
                    f"Callback create_renderer must return a renderer object, got {type(renderer).__name__}")
            self._renderer = renderer
            if self.state is RenderState.UNINITIALIZED:
                self.state = RenderState.READY
        return self._renderer

    def open_print_dialog(self) -> None:
        """Ask PDF viewers to open the print dialog when the document is opened."""
        set_js = getattr(self.get_renderer(), 'set_js', None)
        if not callable(set_js):
            raise StateError('Renderer does not support document JavaScript')
        set_js('print();')

    # Output

    def send(self) -> Optional[bytes]:
        """Render the document and deliver it to ``output_destination``.

        Returns the PDF bytes for OutputDestination.STRING, otherwise None.
        """
        if self.state in (RenderState.FINALIZED, RenderState.FAILED, RenderState.WRITTEN):
            raise StateError(f"Response has already been sent (state: {self.state.value})")

        try:
            result = self._send()
        except PdfResponseError:
            self.state = RenderState.FAILED
            raise
        except Exception as e:
            self.state = RenderState.FAILED
            self.logger.error(f"Error generating PDF: {e}")
            raise RenderError(f"PDF generation failed: {e}") from e

        self.state = RenderState.FINALIZED
        return result

    def _send(self) -> Optional[bytes]:
        destination = self.get_output_destination()
        html = self.get_source()

        # the renderer must never get an empty document
        if not html:
            html = EMPTY_DOCUMENT

        renderer = self.get_renderer()
        zoom, layout = check_display_mode(self.display_zoom, self.display_layout)
        renderer.bidirectional = self.multi_language
        renderer.set_author(self.document_author)
        renderer.set_title(self.document_title)
        renderer.set_display_mode(zoom, layout)

        if self.ignore_styles_in_html:
            html = strip_styles(html, self.create_dom())
            if not html:
                html = EMPTY_DOCUMENT
            mode = WriteMode.HTML_BODY
        else:
            mode = WriteMode.DEFAULT

        try_call(self.on_before_write, self)

        self.logger.debug(f"Writing {len(html)} chars of HTML (mode {mode.name})")
        renderer.write_html(html, mode)
        self.state = RenderState.WRITTEN

        if self.styles:
            renderer.write_html(self.styles, WriteMode.HEADER_CSS)

        try_call(self.on_before_complete, self)

        if not self.output_name:
            self.output_name = self.default_output_name()

        result = renderer.output(self.output_name, destination)
        self.logger.info(f"PDF '{self.output_name}' sent to {destination.name}")
        return result if destination is OutputDestination.STRING else None
