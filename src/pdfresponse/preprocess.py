#!/usr/bin/env python3
"""
Style stripping for documents whose own CSS should be ignored.

Comment removal is regex based and therefore best-effort: malformed markup
(unterminated comments, comments inside attribute values) is not handled the
way a full HTML parser would handle it.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

MPDF_OPEN_RE = re.compile(r'<!--mpdf', re.IGNORECASE)
MPDF_CLOSE_RE = re.compile(r'mpdf-->', re.IGNORECASE)
COMMENT_RE = re.compile(r'<!--.*?-->', re.DOTALL)

DEFAULT_DOM_OPTIONS = {
    'remove_styles': False,
}


class HtmlDom:
    """Small DOM-query facade over BeautifulSoup."""

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = dict(DEFAULT_DOM_OPTIONS)
        if options:
            self.options.update(options)
        self.parser = self.options.get('parser', 'html.parser')
        self.soup: Optional[BeautifulSoup] = None

    def load_string(self, html: str) -> 'HtmlDom':
        self.soup = BeautifulSoup(html, self.parser)
        if self.options.get('remove_styles'):
            for element in self.soup.find_all(style=True):
                del element['style']
        return self

    def find(self, tag: str) -> List[Any]:
        if self.soup is None:
            return []
        return self.soup.find_all(tag)

    def remove(self, element: Any) -> None:
        element.decompose()

    def serialize(self) -> str:
        return str(self.soup) if self.soup is not None else ''

    def __str__(self) -> str:
        return self.serialize()


def strip_comments(html: str) -> str:
    """Remove mPDF-style sentinel markers, then every HTML comment."""
    html = MPDF_OPEN_RE.sub('', html)
    html = MPDF_CLOSE_RE.sub('', html)
    return COMMENT_RE.sub('', html)


def strip_styles(html: str, dom: Optional[HtmlDom] = None) -> str:
    """Remove comments and every <style> element from ``html``."""
    html = strip_comments(html)

    if dom is None:
        dom = HtmlDom()
    dom.load_string(html)

    removed = 0
    for element in dom.find('style'):
        dom.remove(element)
        removed += 1

    logger.debug(f"Removed {removed} <style> element(s) from document")
    return dom.serialize()
