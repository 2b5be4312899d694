"""🗄️ Робота з обʼєктним сховищем зображень товарів."""

from .item_image_service import (
    ItemImageService,
    UploadedImage,
    build_item_image_path,
    guess_ext_from_content_type,
)

__all__ = ["ItemImageService", "UploadedImage", "build_item_image_path", "guess_ext_from_content_type"]
