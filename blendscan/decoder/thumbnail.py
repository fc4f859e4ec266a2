"""Conversion of embedded RGBA previews into regular images."""

from pathlib import Path

from PIL import Image

from blendscan.decoder.models import FormatInfo
from blendscan.exceptions import NoThumbnailError


def thumbnail_image(info: FormatInfo, flip: bool = True) -> Image.Image:
    """Build a Pillow image from the preview stored in ``info``.

    Previews are stored bottom row first; ``flip`` turns them upright.
    """
    if info.thumbnail is None or not info.thumb_width or not info.thumb_height:
        raise NoThumbnailError("File has no embedded thumbnail")
    if info.thumb_width < 0 or info.thumb_height < 0:
        raise NoThumbnailError(
            f"File has no embedded thumbnail of usable size ({info.thumb_width}x{info.thumb_height})"
        )

    image = Image.frombytes("RGBA", (info.thumb_width, info.thumb_height), info.thumbnail)
    if flip:
        image = image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    return image


def save_thumbnail(info: FormatInfo, output: Path, flip: bool = True) -> Path:
    with thumbnail_image(info, flip=flip) as image:
        image.save(output, format="PNG")
    return output
