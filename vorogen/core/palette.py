"""Colour palette: named default colours, hex parsing, wraparound lookup."""

from vorogen.core.types import Color, Palette, PreconditionError

# Ordered: get_color indexes into this order.
DEFAULT_PALETTE: dict[str, str] = {
    'crimson': '#dc2626',
    'tangerine': '#f97316',
    'amber': '#f59e0b',
    'lemon': '#facc15',
    'lime': '#84cc16',
    'emerald': '#10b981',
    'teal': '#14b8a6',
    'cyan': '#06b6d4',
    'sky': '#0ea5e9',
    'cobalt': '#2563eb',
    'indigo': '#4f46e5',
    'violet': '#8b5cf6',
    'fuchsia': '#d946ef',
    'rose': '#f43f5e',
    'slate': '#475569',
    'sand': '#e7e5e4',
}


def hex_to_rgb(hex_str: str) -> Color:
    """Convert '#rrggbb', '#rgb' or the same without '#' to an (r, g, b) tuple."""
    h = hex_str.strip().lstrip('#')
    if len(h) == 3:
        h = ''.join(c * 2 for c in h)
    if len(h) != 6:
        raise PreconditionError(f'Invalid hex colour: {hex_str!r}')
    try:
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    except ValueError as exc:
        raise PreconditionError(f'Invalid hex colour: {hex_str!r}') from exc


def rgb_to_hex(color: Color) -> str:
    r, g, b = color
    return f'#{r:02x}{g:02x}{b:02x}'


def default_palette() -> list[Color]:
    return [hex_to_rgb(v) for v in DEFAULT_PALETTE.values()]


def parse_palette(text: str) -> list[Color]:
    """Parse a comma-separated list of hex colours, e.g. '#ff0000,#00f'."""
    entries = [part for part in (p.strip() for p in text.split(',')) if part]
    if not entries:
        raise PreconditionError('Palette must contain at least one colour')
    return [hex_to_rgb(e) for e in entries]


def get_color(palette: Palette, index: int) -> Color:
    """Return the palette entry at index, wrapping around the palette length."""
    if not palette:
        raise PreconditionError('Palette must contain at least one colour')
    return palette[index % len(palette)]
