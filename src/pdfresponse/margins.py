"""Page margin parsing."""

from dataclasses import dataclass, astuple
from typing import Dict

from .exceptions import ConfigError

MARGIN_NAMES = ('top', 'right', 'bottom', 'left', 'header', 'footer')


@dataclass(frozen=True)
class Margins:
    """Page margins in millimetres."""
    top: int
    right: int
    bottom: int
    left: int
    header: int
    footer: int

    def as_dict(self) -> Dict[str, int]:
        return dict(zip(MARGIN_NAMES, astuple(self)))


def parse_margins(text: str) -> Margins:
    """Parse "top,right,bottom,left,header,footer" into Margins.

    Raises ConfigError unless exactly six non-negative integers are given.
    """
    tokens = str(text).split(',')
    if len(tokens) != len(MARGIN_NAMES):
        raise ConfigError('You must specify all margins! For example: 16,15,16,15,9,9')

    values = []
    for name, token in zip(MARGIN_NAMES, tokens):
        try:
            value = int(token.strip())
        except ValueError:
            raise ConfigError(f"Margin '{name}' is not an integer: {token!r}") from None
        if value < 0:
            raise ConfigError('Margin must not be negative number!')
        values.append(value)

    return Margins(*values)
