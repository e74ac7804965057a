"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('TODO_PRIMARY', 'TODO_ROW', 'TODO_MUTED')

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def parse_env_overrides(text: str) -> dict[str, str]:
    """Pick valid palette entries out of .env-style ``KEY=#rrggbb`` lines."""
    overrides: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip()
        if k in PALETTE_KEYS and _is_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides

def _resolve(key: str, default: str) -> str:
    """Priority: real env var > .env override > default."""
    value = os.environ.get(key)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
REVERSE = _code('7')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_ROW_DEFAULT = '#48B3AF'
HEX_MUTED_DEFAULT = '#8A8F98'

_ENV_OVERRIDES: dict[str, str] = {}
_env_path = Path(__file__).resolve().parent.parent / '.env'
if _env_path.exists():
    try:
        _ENV_OVERRIDES = parse_env_overrides(_env_path.read_text())
    except (OSError, UnicodeDecodeError):
        logger.debug("Could not read palette overrides from %s", _env_path, exc_info=True)

HEX_PRIMARY = _resolve('TODO_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_ROW = _resolve('TODO_ROW', HEX_ROW_DEFAULT)
HEX_MUTED = _resolve('TODO_MUTED', HEX_MUTED_DEFAULT)

PRIMARY = _from_hex(HEX_PRIMARY)
C_ROW = _from_hex(HEX_ROW)
C_MUTED = _from_hex(HEX_MUTED)

HEADER_COLOR = PRIMARY
ROW_COLOR = C_ROW
KEY_COLOR = PRIMARY + BOLD  # row handles in bold primary
BUTTON_COLOR = PRIMARY + REVERSE
EMPTY_COLOR = DIM + C_MUTED

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','parse_env_overrides','RESET','BOLD','DIM','REVERSE','HEADER_COLOR','ROW_COLOR',
    'KEY_COLOR','BUTTON_COLOR','EMPTY_COLOR','HEX_PRIMARY','HEX_ROW','HEX_MUTED',
    '_ENABLE','_USE_TRUECOLOR','_FORCE'
]
