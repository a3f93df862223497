"""
QR Render - turn a login challenge code into something scannable

Pure functions; the session handlers decide where the output goes.
"""

import io

import qrcode
import qrcode.image.svg


def render_qr_svg(code: str) -> str:
    """Render the challenge as a standalone SVG document"""
    image = qrcode.make(code, image_factory=qrcode.image.svg.SvgPathImage)
    return image.to_string(encoding="unicode")


def render_qr_terminal(code: str) -> str:
    """Render the challenge with block characters for a terminal"""
    qr = qrcode.QRCode(border=1)
    qr.add_data(code)
    qr.make(fit=True)

    buffer = io.StringIO()
    qr.print_ascii(out=buffer, invert=True)
    return buffer.getvalue()
