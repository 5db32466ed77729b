import sys
from termcolor import cprint

LOG_LEVEL_NORMAL = 0
LOG_LEVEL_VERBOSE = 1

# https://en.wikipedia.org/wiki/ANSI_escape_code#SGR_parameters
# https://en.wikipedia.org/wiki/ANSI_escape_code#3/4_bit
_MESSAGE_COLOR = {
    ">>>": (None,     ["bold"]),
    "[ER": ("red",    ["bold"]),
    "[WA": ("red",    ["bold"]),
    "[OK": ("green",  []),
    "[DE": ("cyan",   []),
    "***": ("yellow", []),
}


class XPrint:
    def __init__(self):
        self._loglevel = LOG_LEVEL_NORMAL

    @property
    def loglevel(self):
        return self._loglevel

    def set_loglevel(self, loglevel):
        self._loglevel = loglevel

    def __call__(self, msg, file=None, end='\n', ignore_header=False):
        msg = str(msg)
        color, attrs = (None, None) if ignore_header \
            else _MESSAGE_COLOR.get(msg[:3]) or (None, None)
        cprint(msg, color, attrs=attrs, file=file or sys.stdout, end=end, flush=True)

    def verbose(self, msg, **kwargs):
        if self._loglevel >= LOG_LEVEL_VERBOSE:
            self(msg, **kwargs)

    def ok(self, msg):
        self(f"[OK] {msg}")

    def warning(self, msg):
        self(f"[WARNING] {msg}", file=sys.stderr)

    def error(self, msg):
        self(f"[ERR] {msg}", file=sys.stderr)

    def debug(self, msg):
        self(f"[DEBUG] {msg}", file=sys.stderr)


xprint = XPrint()
