#!/usr/bin/env python3
"""
Document sources.

A source is either a raw HTML string or a TemplateSource. Template sources get
the response and its renderer injected before they are rendered, so templates
can reach both (e.g. ``{{ pdf_response.document_title }}``).
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from .exceptions import StateError

logger = logging.getLogger(__name__)


class TemplateSource(ABC):
    """Abstract base for sources that render themselves to HTML."""

    pdf_response = None
    renderer = None

    @abstractmethod
    def render(self) -> str:
        """Render the template to an HTML string."""
        pass


class JinjaTemplate(TemplateSource):
    """Jinja2-backed template source."""

    def __init__(self, template: Template, **params: Any):
        self.template = template
        self.params: Dict[str, Any] = dict(params)

    @classmethod
    def from_string(cls, text: str, **params: Any) -> 'JinjaTemplate':
        env = Environment(autoescape=True)
        return cls(env.from_string(text), **params)

    @classmethod
    def from_file(cls, path: str, **params: Any) -> 'JinjaTemplate':
        template_path = Path(path)
        env = Environment(
            loader=FileSystemLoader(str(template_path.parent)),
            autoescape=select_autoescape(['html', 'htm', 'xml']),
        )
        return cls(env.get_template(template_path.name), **params)

    def render(self) -> str:
        context = dict(self.params)
        context['pdf_response'] = self.pdf_response
        context['renderer'] = self.renderer
        return self.template.render(**context)


def describe_type(value: Any) -> str:
    if value is None:
        return 'NoneType'
    if isinstance(value, (int, float, bool, bytes, list, tuple, dict, set)):
        return type(value).__name__
    return f"object of class {type(value).__module__}.{type(value).__qualname__}"


def resolve_source(source: Any, pdf_response: Any = None,
                   renderer_getter: Optional[Callable[[], Any]] = None) -> str:
    """Turn a source into an HTML string.

    Strings are returned unchanged. Template sources receive ``pdf_response``
    and ``renderer`` before rendering. Anything else raises StateError.
    """
    if isinstance(source, str):
        return source

    if not source:
        raise StateError('Source is not defined!')

    if isinstance(source, TemplateSource):
        source.pdf_response = pdf_response
        source.renderer = renderer_getter() if renderer_getter is not None else None
        html = source.render()
        logger.debug(f"Rendered template source {type(source).__name__} ({len(html)} chars)")
        return html

    raise StateError(f"Source is not supported! (type: {describe_type(source)})")
