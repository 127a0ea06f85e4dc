#!/usr/bin/env python3
"""
Renderer capability and the default WeasyPrint-backed implementation.

A renderer accumulates HTML and stylesheet chunks, carries document metadata,
and turns everything into a PDF on ``output()``.
"""

import logging
import os
import sys
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Union

import pydyf
from bs4 import BeautifulSoup, Doctype
from weasyprint import CSS, HTML
from weasyprint.text.fonts import FontConfiguration

from .config import DocumentConfig
from .constants import OutputDestination, WriteMode
from .exceptions import RenderError, StateError

REQUIRED_METHODS = ('set_author', 'set_title', 'set_display_mode', 'write_html', 'output')

PAGE_LAYOUTS = {
    'single': '/SinglePage',
    'continuous': '/OneColumn',
    'two': '/TwoColumnLeft',
}


def is_renderer(obj: Any) -> bool:
    """True if ``obj`` provides every method of the renderer capability surface."""
    return all(callable(getattr(obj, name, None)) for name in REQUIRED_METHODS)


class Renderer(ABC):
    """Capability surface every renderer must provide.

    Subclassing is optional: the response accepts any object for which
    ``is_renderer()`` holds.
    """

    bidirectional = False

    @abstractmethod
    def set_author(self, author: str) -> None:
        pass

    @abstractmethod
    def set_title(self, title: str) -> None:
        pass

    @abstractmethod
    def set_display_mode(self, zoom: Union[str, int], layout: str) -> None:
        pass

    @abstractmethod
    def write_html(self, html: str, mode: WriteMode = WriteMode.DEFAULT) -> None:
        pass

    @abstractmethod
    def output(self, name: Optional[str], destination: OutputDestination) -> Optional[bytes]:
        """Finish the document. Returns the bytes for OutputDestination.STRING."""
        pass

    def set_js(self, script: str) -> None:
        raise StateError(f"{type(self).__name__} does not support document JavaScript")


class WeasyRenderer(Renderer):
    """Renderer backed by WeasyPrint."""

    def __init__(self, config: DocumentConfig, stream=None):
        self.config = config
        self.options = config.renderer_options()
        self.stream = stream
        self.logger = logging.getLogger(__name__)
        self.font_config = FontConfiguration()

        self.bidirectional = config.multi_language
        self.author = config.author
        self.title = config.title
        self.display_zoom: Union[str, int] = config.display_zoom
        self.display_layout = config.display_layout
        self.scripts: List[str] = []

        self._html_parts: List[str] = []
        self._stylesheets: List[str] = []

    def set_author(self, author: str) -> None:
        self.author = author

    def set_title(self, title: str) -> None:
        self.title = title

    def set_display_mode(self, zoom: Union[str, int], layout: str) -> None:
        self.display_zoom = zoom
        self.display_layout = layout

    def set_js(self, script: str) -> None:
        self.scripts.append(script)

    def write_html(self, html: str, mode: WriteMode = WriteMode.DEFAULT) -> None:
        mode = WriteMode(mode)
        if mode is WriteMode.HEADER_CSS:
            self._stylesheets.append(html)
        elif mode is WriteMode.HTML_BODY:
            self._html_parts.append(self._body_content(html))
        else:
            self._html_parts.append(html)
        self.logger.debug(f"Wrote {len(html)} chars in mode {mode.name}")

    def _body_content(self, html: str) -> str:
        soup = BeautifulSoup(html, 'html.parser')
        if soup.body is None:
            return html
        return ''.join(str(child) for child in soup.body.contents)

    def page_css(self) -> str:
        """@page rule built from format, orientation and margins."""
        page_format = self.options['format']
        orientation = 'landscape' if self.options['orientation'] == 'L' else 'portrait'
        if page_format.upper().endswith('-L'):
            page_format, orientation = page_format[:-2], 'landscape'
        elif page_format.upper().endswith('-P'):
            page_format = page_format[:-2]

        rules = [
            '@page {',
            f"  size: {page_format} {orientation};",
            f"  margin: {self.options['margin_top']}mm {self.options['margin_right']}mm "
            f"{self.options['margin_bottom']}mm {self.options['margin_left']}mm;",
        ]
        for box in ('top-left', 'top-center', 'top-right'):
            rules.append(f"  @{box} {{ vertical-align: top; padding-top: {self.options['margin_header']}mm; }}")
        for box in ('bottom-left', 'bottom-center', 'bottom-right'):
            rules.append(f"  @{box} {{ vertical-align: bottom; padding-bottom: {self.options['margin_footer']}mm; }}")
        rules.append('}')
        if self.bidirectional:
            rules.append('body { unicode-bidi: plaintext; }')
        return '\n'.join(rules)

    def compose_html(self) -> str:
        """Join written chunks and put the page rule ahead of the document's own CSS."""
        soup = BeautifulSoup('\n'.join(self._html_parts), 'html.parser')
        style = soup.new_tag('style')
        style.string = self.page_css()
        if soup.head is not None:
            soup.head.insert(0, style)
        elif soup.html is not None:
            soup.html.insert(0, style)
        else:
            # keep a leading doctype first, otherwise the document renders in quirks mode
            position = 0
            for index, node in enumerate(soup.contents):
                if isinstance(node, Doctype):
                    position = index + 1
                    break
            soup.insert(position, style)
        return str(soup)

    def _finish(self, document, pdf) -> None:
        """Apply display preferences and scripts to the PDF catalog."""
        layout = PAGE_LAYOUTS.get(self.display_layout)
        if layout:
            pdf.catalog['PageLayout'] = layout

        open_action = self._open_action(pdf)
        if open_action is not None:
            pdf.catalog['OpenAction'] = open_action

        if self.scripts:
            names = pdf.catalog.get('Names')
            if not isinstance(names, pydyf.Dictionary):
                names = pydyf.Dictionary()
                pdf.catalog['Names'] = names
            entries = []
            for i, script in enumerate(self.scripts):
                action = pydyf.Dictionary({'S': '/JavaScript', 'JS': pydyf.String(script)})
                pdf.add_object(action)
                entries.extend([pydyf.String(f'script{i}'), action.reference])
            names['JavaScript'] = pydyf.Dictionary({'Names': pydyf.Array(entries)})

    def _open_action(self, pdf) -> Optional[Any]:
        zoom = self.display_zoom
        if zoom == 'default':
            return None
        first_page = list(pdf.pages['Kids'][:3])
        if not first_page:
            return None
        if zoom == 'fullpage':
            target = ['/Fit']
        elif zoom == 'fullwidth':
            target = ['/FitH', 'null']
        elif zoom == 'real':
            target = ['/XYZ', 'null', 'null', 1]
        else:
            target = ['/XYZ', 'null', 'null', int(zoom) / 100]
        return pydyf.Array(first_page + target)

    def render_pdf(self) -> bytes:
        html_content = self.compose_html()
        temp_dir = self.options.get('temp_dir')
        if temp_dir:
            os.makedirs(temp_dir, exist_ok=True)

        with tempfile.NamedTemporaryFile(mode='w', suffix='.html', delete=False,
                                         encoding='utf-8', dir=temp_dir) as tmp_file:
            tmp_file.write(html_content)
            tmp_html_path = tmp_file.name

        try:
            self.logger.debug(f"HTML file size: {os.path.getsize(tmp_html_path)} bytes")
            base_url = self.config.base_url or os.getcwd()
            stylesheets = [CSS(string=css, font_config=self.font_config) for css in self._stylesheets]
            document = HTML(filename=tmp_html_path, base_url=base_url, encoding=self.options['mode']).render(
                stylesheets=stylesheets, font_config=self.font_config)
            document.metadata.title = self.title
            document.metadata.authors = [self.author] if self.author else []
            return document.write_pdf(finisher=self._finish)
        except Exception as weasy_error:
            self.logger.error(f"WeasyPrint error: {weasy_error}")
            raise RenderError(f"PDF generation failed: {weasy_error}") from weasy_error
        finally:
            os.unlink(tmp_html_path)

    def output(self, name: Optional[str], destination: OutputDestination) -> Optional[bytes]:
        destination = OutputDestination.parse(destination)
        pdf_bytes = self.render_pdf()
        self.logger.info(f"Rendered PDF '{name}' ({len(pdf_bytes)} bytes, destination {destination.name})")

        if destination is OutputDestination.STRING:
            return pdf_bytes

        if destination is OutputDestination.FILE:
            path = Path(name)
            if path.parent and not path.parent.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(pdf_bytes)
            self.logger.info(f"PDF saved: {path}")
            return None

        stream = self.stream if self.stream is not None else sys.stdout.buffer
        stream.write(pdf_bytes)
        stream.flush()
        return None
