#!/usr/bin/env python3
"""
Closed sets of option values understood by the response and its renderer.
"""

from enum import Enum


class Orientation(Enum):
    """Page orientation."""
    PORTRAIT = 'P'
    LANDSCAPE = 'L'

    @classmethod
    def parse(cls, value) -> 'Orientation':
        if isinstance(value, cls):
            return value
        aliases = {'portrait': cls.PORTRAIT, 'landscape': cls.LANDSCAPE}
        text = str(value).strip()
        if text.lower() in aliases:
            return aliases[text.lower()]
        return cls(text.upper())


class OutputDestination(Enum):
    """Where the finished document goes."""
    INLINE = 'I'      # send inline, the name is used for "Save as"
    DOWNLOAD = 'D'    # force a download with the given name
    FILE = 'F'        # save to a local file (name may include a path)
    STRING = 'S'      # return the document bytes, name is ignored

    @classmethod
    def parse(cls, value) -> 'OutputDestination':
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            return cls[text.upper()]
        except KeyError:
            return cls(text.upper())


class WriteMode(Enum):
    """How a chunk written to the renderer is interpreted."""
    DEFAULT = 0       # parse all: HTML + CSS
    HEADER_CSS = 1    # the chunk is a stylesheet only
    HTML_BODY = 2     # only <body> content is used, document CSS is ignored


class RenderState(Enum):
    UNINITIALIZED = 'uninitialized'
    READY = 'ready'
    WRITTEN = 'written'
    FINALIZED = 'finalized'
    FAILED = 'failed'


DISPLAY_ZOOM_VALUES = ('fullpage', 'fullwidth', 'real', 'default')
DISPLAY_LAYOUT_VALUES = ('single', 'continuous', 'two', 'default')

EMPTY_DOCUMENT = '<html><body></body></html>'
