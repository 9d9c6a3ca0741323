"""Image upload validation."""

import base64
from dataclasses import dataclass
from typing import Optional

from ..errors import ValidationError

MAX_IMAGE_BYTES = 5 * 1024 * 1024


@dataclass
class ImageUpload:
    """An accepted image upload."""

    filename: str
    mimetype: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mimetype};base64,{encoded}"


def validate_image_upload(
    filename: Optional[str],
    mimetype: Optional[str],
    data: Optional[bytes],
    max_bytes: int = MAX_IMAGE_BYTES,
) -> ImageUpload:
    """
    Check an upload before it reaches any provider.

    Raises ValidationError for a missing file, a non-image MIME type,
    or a payload larger than max_bytes.
    """
    if data is None or not filename:
        raise ValidationError("No image file provided")

    if not (mimetype or "").startswith("image/"):
        raise ValidationError("Only image files are allowed!")

    if len(data) > max_bytes:
        raise ValidationError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")

    return ImageUpload(filename=filename, mimetype=mimetype, data=data)
