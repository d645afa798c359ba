"""Magic-byte classification of image payloads."""

from newsreel.data import ImageFormat


def sniff_image_format(data: bytes) -> ImageFormat | None:
    """Classify ``data`` by its leading bytes.

    Returns:
        The detected container, or None if the payload is not a known image.
    """
    if data[:3] == b"\xff\xd8\xff":
        return ImageFormat.JPEG
    if data[:8] == b"\x89PNG\r\n\x1a\n":
        return ImageFormat.PNG
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return ImageFormat.GIF
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return ImageFormat.WEBP
    if data[:2] == b"BM" and len(data) >= 26:
        return ImageFormat.BMP
    return None
