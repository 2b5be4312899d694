# 🖼️ giftlist/infrastructure/storage/item_image_service.py
"""
🖼️ ItemImageService — зображення товарів списку бажань у публічному bucket.

🔹 Будує шляхи `lists/{list_id}/items/{item_id}/{index}.{ext}`.
🔹 Завантажує зображення з превʼю (httpx) і зберігає через `IObjectStorage`.
🔹 Каскад: файл користувача → зображення з превʼю → дефолтне зображення bucket.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 Транспортні винятки

# 🔠 Системні імпорти
import logging															# 🧾 Логування
from dataclasses import dataclass										# 🧱 DTO завантаженого файлу
from typing import Any, List, Mapping, Optional						# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from giftlist.domain.storage.interfaces import IObjectStorage			# 🗄️ Контракт сховища
from giftlist.infrastructure.web.page_fetcher import HtmlPageFetcher	# 🌐 Завантаження байтів
from giftlist.shared.errors import AppError, ParseError				# ⚠️ Доменні помилки
from giftlist.shared.utils.logger import LOG_NAME						# 🏷️ Імʼя базового логера

logger = logging.getLogger(f"{LOG_NAME}.storage.item_images")

ITEM_IMAGES_BUCKET = "item-images"
DEFAULT_ITEM_IMAGE_PATH = "default.jpg"
DEFAULT_MAX_IMAGE_BYTES = 10_000_000
_FALLBACK_CONTENT_TYPE = "image/jpeg"


# ================================
# 🧰 ЧИСТІ ХЕЛПЕРИ
# ================================
def guess_ext_from_content_type(content_type: Optional[str]) -> str:
    """🏷️ Розширення файлу за Content-Type (за замовчуванням jpg)."""
    ct = (content_type or "").lower()
    if "png" in ct:
        return "png"
    if "webp" in ct:
        return "webp"
    if "gif" in ct:
        return "gif"
    return "jpg"


def build_item_image_path(list_id: str, item_id: str, index: int, ext: str = "jpg") -> str:
    ext_clean = (ext or "jpg").replace(".", "")
    return f"lists/{list_id}/items/{item_id}/{index}.{ext_clean}"


@dataclass(frozen=True, slots=True)
class UploadedImage:
    """📎 Файл, переданий користувачем напряму."""

    data: bytes
    content_type: Optional[str] = None


# ================================
# 🖼️ СЕРВІС
# ================================
class ItemImageService:
    """🖼️ Зберігає зображення товарів і повертає їхні публічні адреси."""

    def __init__(
        self,
        storage: IObjectStorage,
        fetcher: HtmlPageFetcher,
        *,
        public_base_url: Optional[str] = None,
        bucket: str = ITEM_IMAGES_BUCKET,
        default_image_path: str = DEFAULT_ITEM_IMAGE_PATH,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self.storage = storage
        self.fetcher = fetcher
        self.public_base_url = (public_base_url or "").rstrip("/") or None
        self.bucket = bucket
        self.default_image_path = default_image_path
        self.max_image_bytes = max_image_bytes

    @classmethod
    def from_config(
        cls,
        section: Optional[Mapping[str, Any]],
        storage: IObjectStorage,
        fetcher: HtmlPageFetcher,
    ) -> "ItemImageService":
        """⚙️ Будує сервіс із секції `storage` (ENV: `STORAGE_PUBLIC_URL`, `STORAGE_BUCKET`)."""
        section = section or {}
        return cls(
            storage,
            fetcher,
            public_base_url=section.get("public_base_url"),
            bucket=section.get("bucket") or ITEM_IMAGES_BUCKET,
            default_image_path=section.get("default_image_path") or DEFAULT_ITEM_IMAGE_PATH,
            max_image_bytes=int(section.get("max_image_bytes") or DEFAULT_MAX_IMAGE_BYTES),
        )

    def default_item_image_url(self) -> Optional[str]:
        """🖼️ Публічний URL дефолтного зображення або None без базової адреси."""
        if not self.public_base_url:
            return None
        return f"{self.public_base_url}/storage/v1/object/public/{self.bucket}/{self.default_image_path}"

    async def upload_file(self, list_id: str, item_id: str, upload: UploadedImage, index: int = 0) -> str:
        content_type = upload.content_type or _FALLBACK_CONTENT_TYPE
        path = build_item_image_path(list_id, item_id, index, guess_ext_from_content_type(content_type))
        return await self.storage.put(path, upload.data, content_type)

    async def upload_external_image(self, list_id: str, item_id: str, image_url: str, index: int = 0) -> str:
        """
        🌐 Завантажує зовнішнє зображення й кладе його у bucket.

        Raises:
            NetworkError: Відповідь не 2xx або файл завеликий.
            ParseError: Content-Type не `image/*`.
        """
        fetched = await self.fetcher.fetch_binary(image_url, max_bytes=self.max_image_bytes)
        content_type = fetched.content_type or _FALLBACK_CONTENT_TYPE
        if not content_type.lower().startswith("image/"):
            raise ParseError("URL does not point to an image.", url=image_url, details=content_type)

        path = build_item_image_path(list_id, item_id, index, guess_ext_from_content_type(content_type))
        public_url = await self.storage.put(path, fetched.content, content_type)
        logger.info("🖼️ Зовнішнє зображення збережено: %s → %s", image_url, path)
        return public_url

    async def collect_item_images(
        self,
        list_id: str,
        item_id: str,
        *,
        upload: Optional[UploadedImage] = None,
        scraped_image_url: Optional[str] = None,
    ) -> List[str]:
        """📚 Файл користувача → зображення з превʼю → дефолт; порожній список, якщо нічого."""
        image_urls: List[str] = []

        if upload is not None:
            image_urls.append(await self.upload_file(list_id, item_id, upload))

        if not image_urls and scraped_image_url:
            try:
                image_urls.append(await self.upload_external_image(list_id, item_id, scraped_image_url))
            except (AppError, httpx.HTTPError, OSError) as exc:			# 🪂 Збій превʼю-зображення не блокує товар
                logger.warning("⚠️ Зображення з превʼю пропущено (%s): %s", scraped_image_url, exc)

        if not image_urls:
            default_url = self.default_item_image_url()
            if default_url:
                image_urls.append(default_url)

        return image_urls


__all__ = [
    "DEFAULT_ITEM_IMAGE_PATH",
    "ITEM_IMAGES_BUCKET",
    "ItemImageService",
    "UploadedImage",
    "build_item_image_path",
    "guess_ext_from_content_type",
]
