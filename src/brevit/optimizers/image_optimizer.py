"""
Default image optimizer.

OCR is a stub that reports the payload size and a fixed sample; metadata
mode describes the image from its magic bytes without decoding it.
"""

from ..core.config import BrevitConfig
from ..models.enums import ImageOptimizationMode

# (magic prefix, format name)
IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "PNG"),
    (b"\xff\xd8\xff", "JPEG"),
    (b"GIF87a", "GIF"),
    (b"GIF89a", "GIF"),
    (b"BM", "BMP"),
)


def sniff_image_format(data: bytes) -> str:
    """
    Guess the image format from its leading bytes.

    Returns:
        Format name, or "unknown"
    """
    # RIFF....WEBP
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "WEBP"
    for magic, name in IMAGE_SIGNATURES:
        if data.startswith(magic):
            return name
    return "unknown"


class DefaultImageOptimizer:
    """Local, model-free image optimizer."""

    async def optimize_image(self, data: bytes, config: BrevitConfig) -> str:
        match config.image_mode:
            case ImageOptimizationMode.NONE:
                return ""
            case ImageOptimizationMode.METADATA:
                return f"[Image: {sniff_image_format(data)}, {len(data)} bytes]"
            case _:
                return (
                    f"[OCR Stub: Extracted text from image ({len(data)} bytes)]\n"
                    "Sample OCR Text: INVOICE #1234\n"
                    "Total: $499.99\n"
                    "[End of extracted text]"
                )
