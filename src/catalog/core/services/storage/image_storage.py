"""Local filesystem storage for uploaded product images."""

import shutil
import uuid
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from loguru import logger

from src.catalog.core.exceptions import UnsupportedImageTypeError
from src.catalog.runtime.config.config_data import UploadConfig


class ImageStorageService:
    """Save and remove product images below the configured upload directory.

    Files are written as ``<directory>/<subdirectory>/<random hex><ext>`` and
    exposed as ``<public_path>/<subdirectory>/<random hex><ext>``.
    """

    def __init__(self, config: UploadConfig) -> None:
        self._folder = Path(config.directory) / config.subdirectory
        self._url_prefix = f"{config.public_path.rstrip('/')}/{config.subdirectory}/"
        self._allowed = [ext.lower() for ext in config.allowed_extensions]

    @property
    def folder(self) -> Path:
        return self._folder

    def ensure_directory(self) -> None:
        self._folder.mkdir(parents=True, exist_ok=True)

    def validate(self, filename: str | None) -> str:
        """Return the lower-cased extension of ``filename`` or raise."""
        name = PurePosixPath(filename or "").name
        # A name such as ".png" is all extension
        suffix = PurePosixPath(name).suffix or (name if name.startswith(".") else "")
        extension = suffix.lower()
        if extension not in self._allowed:
            raise UnsupportedImageTypeError(extension, self._allowed)
        return extension

    def save(self, filename: str | None, content: BinaryIO) -> str:
        """Write ``content`` under a random name and return its public URL."""
        extension = self.validate(filename)
        self.ensure_directory()

        stored_name = f"{uuid.uuid4().hex}{extension}"
        destination = self._folder / stored_name
        with destination.open("wb") as out:
            shutil.copyfileobj(content, out)

        logger.info("Stored image {} as {}", filename, destination)
        return f"{self._url_prefix}{stored_name}"

    def path_for(self, image_url: str | None) -> Path | None:
        """Map a public URL back to its file, or None for foreign URLs."""
        if not image_url or not image_url.startswith(self._url_prefix):
            return None
        name = image_url[len(self._url_prefix):]
        if not name or PurePosixPath(name).name != name:
            return None
        return self._folder / name

    def delete(self, image_url: str | None) -> bool:
        """Best-effort removal of a locally hosted image.

        Never raises; returns True only when a file was actually removed.
        """
        path = self.path_for(image_url)
        if path is None:
            if image_url:
                logger.debug("Not deleting image {}: not hosted locally", image_url)
            return False

        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Image file {} already missing", path)
            return False
        except OSError as e:
            logger.error("Failed to delete image file {}: {}", path, e)
            return False

        logger.info("Deleted image file {}", path)
        return True
