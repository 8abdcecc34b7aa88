"""Image processing utilities."""

from pathlib import Path
from typing import Union

from PIL import Image


def hex_to_rgba(hex_color: str, alpha: int = 255) -> tuple[int, int, int, int]:
    """Convert a hex color string to an RGBA tuple.

    Raises:
        ValueError: If the string is not a 3, 6 or 8 digit hex color.
    """
    digits = hex_color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) not in (6, 8):
        raise ValueError(f"Invalid hex color: {hex_color!r}")

    r, g, b = int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    if len(digits) == 8:
        alpha = int(digits[6:8], 16)
    return (r, g, b, alpha)


def save_image(image: Image.Image, path: Union[str, Path], quality: int = 95) -> None:
    """Save an image to file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() in (".jpg", ".jpeg"):
        # Convert to RGB for JPEG
        if image.mode == "RGBA":
            background = Image.new("RGB", image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[3])
            image = background
        image.save(path, quality=quality)
    else:
        image.save(path)
