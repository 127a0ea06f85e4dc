#!/usr/bin/env python3
"""
Render-time document configuration.

DocumentConfig is a snapshot of a response's options taken at the moment the
renderer is created; changing the response afterwards does not affect it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .constants import DISPLAY_LAYOUT_VALUES, DISPLAY_ZOOM_VALUES, Orientation
from .exceptions import ConfigError
from .margins import Margins

ENCODING_MODE = 'utf-8'


@dataclass(frozen=True)
class DocumentConfig:
    page_format: str
    orientation: Orientation
    margins: Margins
    author: str = ''
    title: str = ''
    display_zoom: Union[str, int] = 'default'
    display_layout: str = 'continuous'
    temp_dir: Optional[str] = None
    styles: str = ''
    ignore_styles: bool = False
    multi_language: bool = False
    base_url: Optional[str] = None
    mode: str = ENCODING_MODE

    def renderer_options(self) -> Dict[str, Any]:
        """Flat option mapping handed to the renderer factory."""
        options = {
            'mode': self.mode,
            'format': self.page_format,
            'margin_left': self.margins.left,
            'margin_right': self.margins.right,
            'margin_top': self.margins.top,
            'margin_bottom': self.margins.bottom,
            'margin_header': self.margins.header,
            'margin_footer': self.margins.footer,
            'orientation': self.orientation.value,
        }
        if self.temp_dir is not None:
            options['temp_dir'] = self.temp_dir
        return options


def build_config(pdf_response) -> DocumentConfig:
    """Snapshot the options of ``pdf_response`` into a DocumentConfig."""
    try:
        orientation = Orientation.parse(pdf_response.page_orientation)
    except ValueError:
        raise ConfigError(f"Unknown page orientation: {pdf_response.page_orientation!r}") from None

    if not str(pdf_response.page_format or '').strip():
        raise ConfigError('Page format must not be empty')

    return DocumentConfig(
        page_format=str(pdf_response.page_format).strip(),
        orientation=orientation,
        margins=pdf_response.get_margins(),
        author=pdf_response.document_author,
        title=pdf_response.document_title,
        display_zoom=pdf_response.display_zoom,
        display_layout=pdf_response.display_layout,
        temp_dir=pdf_response.temp_dir,
        styles=pdf_response.styles,
        ignore_styles=pdf_response.ignore_styles_in_html,
        multi_language=pdf_response.multi_language,
        base_url=pdf_response.base_url,
    )


def check_display_mode(zoom: Union[str, int], layout: str):
    """Validate display zoom and layout, returning them normalized."""
    if isinstance(zoom, bool):
        raise ConfigError(f"Invalid display zoom: {zoom!r}")
    if isinstance(zoom, str) and zoom.strip().isdigit():
        zoom = int(zoom.strip())
    if isinstance(zoom, int):
        if zoom <= 0:
            raise ConfigError(f"Display zoom percentage must be positive, got {zoom}")
    elif zoom not in DISPLAY_ZOOM_VALUES:
        raise ConfigError(f"Invalid display zoom: {zoom!r} (expected one of {', '.join(DISPLAY_ZOOM_VALUES)} or a percentage)")

    if layout not in DISPLAY_LAYOUT_VALUES:
        raise ConfigError(f"Invalid display layout: {layout!r} (expected one of {', '.join(DISPLAY_LAYOUT_VALUES)})")

    return zoom, layout
