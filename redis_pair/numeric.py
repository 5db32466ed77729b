import re
from .xprint import xprint

_MEMORY_UNITS = {
    'M': 1,
    'G': 1024,
}

_MEMORY_EXP = re.compile(r'^(\d+(?:\.\d+)?)([A-Za-z]*)$')


def parse_mb(text):
    '''Convert a ``used_memory_human`` string ("512.00M", "1.20G") to megabytes.

    Returns None after warning on stderr when the value has no numeric
    prefix or a unit other than M or G.
    '''
    m = _MEMORY_EXP.match((text or '').strip())
    if not m or m.group(2) not in _MEMORY_UNITS:
        xprint.warning(f"Unknown memory format: {text!r}")
        return None
    return float(m.group(1)) * _MEMORY_UNITS[m.group(2)]


def format_thousands(number):
    return f"{number:,}"
