"""
Image storage for catalog uploads
"""
import logging
import os
import time
from fastapi import UploadFile
from food_delivery.core.errors import ValidationError

logger = logging.getLogger(__name__)

class ImageStorage:
    """Stores uploaded images as plain files under one directory"""

    def __init__(self, upload_dir: str, max_size: int, allowed_types):
        self.upload_dir = upload_dir
        self.max_size = max_size
        self.allowed_types = list(allowed_types)
        os.makedirs(self.upload_dir, exist_ok=True)

    def save(self, upload: UploadFile) -> str:
        """Validate and write an upload, returning the stored filename"""
        if upload.content_type not in self.allowed_types:
            raise ValidationError(f"Unsupported image type: {upload.content_type}")

        data = upload.file.read(self.max_size + 1)
        if not data:
            raise ValidationError("Image file is empty")
        if len(data) > self.max_size:
            raise ValidationError("Image file too large")

        original = os.path.basename(upload.filename or "image")
        filename = f"{int(time.time() * 1000)}{original}"
        with open(os.path.join(self.upload_dir, filename), "wb") as fh:
            fh.write(data)
        return filename

    def delete(self, filename: str) -> None:
        path = os.path.join(self.upload_dir, os.path.basename(filename))
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning(f"Image {filename} already missing from {self.upload_dir}")
