"""
Utilities - helpers without session state

Modules:
- qr_render: QR challenge rendering (SVG and terminal)
"""

from .qr_render import render_qr_svg, render_qr_terminal

__all__ = [
    "render_qr_svg",
    "render_qr_terminal",
]
