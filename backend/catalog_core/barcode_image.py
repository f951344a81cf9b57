"""Render an EAN-13 as a PNG label."""
from io import BytesIO

from barcode import EAN13
from barcode.writer import ImageWriter

from catalog_core.barcode import validate
from catalog_core.errors import InvalidBarcode

PNG_MEDIA_TYPE = "image/png"

# Bars plus the human-readable digits underneath, sized for a spine label printer.
LABEL_OPTIONS = {
    "module_width": 0.3,
    "module_height": 15.0,
    "quiet_zone": 3.0,
    "font_size": 10,
    "text_distance": 4.0,
    "dpi": 300,
}


def render_png(code: str) -> bytes:
    """Return PNG bytes for code. Raises InvalidBarcode unless code passes validate()."""
    if not validate(code):
        raise InvalidBarcode("invalid ean13 format", barcode=code)
    buf = BytesIO()
    EAN13(code, writer=ImageWriter(format="PNG")).write(buf, options=LABEL_OPTIONS)
    return buf.getvalue()
