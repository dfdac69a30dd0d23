# blogsphere/utils/uploads.py
import os
import random
import re
import time

import cloudinary
import cloudinary.uploader
from flask import current_app
from werkzeug.utils import secure_filename

from blogsphere.errors import ValidationError
from blogsphere.utils.logging import get_logger

logger = get_logger("uploads")

# Configuración
ALLOWED_MIMETYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/bmp",
    "image/tiff",
    "image/svg+xml",
    "image/x-icon",
    "image/heic",
    "image/heif",
}
ALLOWED_EXTENSIONS = re.compile(r"\.(jpg|jpeg|png|gif|webp|bmp|tiff|tif|svg|ico|heic|heif)$", re.IGNORECASE)
UPLOADS_URL_PREFIX = "/uploads/"
GENERATED_FILENAME = re.compile(r"^[A-Za-z]+-\d+-\d+(\.[A-Za-z0-9]+)?$")
CLOUDINARY_PUBLIC_ID = re.compile(r"/image/upload/(?:[^/]+/)*?(?:v\d+/)(.+?)(?:\.[A-Za-z0-9]+)?$")


def is_absolute_url(value):
    return bool(value) and value.lower().startswith(("http://", "https://"))


def image_url(value):
    """Las URLs absolutas pasan sin cambios; los nombres generados se sirven desde /uploads/."""
    if not value:
        return None
    if is_absolute_url(value):
        return value
    return UPLOADS_URL_PREFIX + value


def file_size(file):
    stream = file.stream
    stream.seek(0, 2)  # mover al final
    size = stream.tell()
    stream.seek(0)     # volver al inicio
    return size


def validate_image(file, field="featuredImage", max_size=None):
    """Rechaza archivos muy grandes o que no son imágenes, antes de persistir nada."""
    if max_size is None:
        max_size = current_app.config["MAX_IMAGE_SIZE"]

    if not file or not file.filename:
        raise ValidationError([{"field": field, "message": "No image file provided"}])

    if file_size(file) > max_size:
        raise ValidationError([{
            "field": field,
            "message": f"Image must be at most {max_size // (1024 * 1024)} MB",
        }])

    mimetype = (file.mimetype or "").lower()
    if mimetype not in ALLOWED_MIMETYPES and not ALLOWED_EXTENSIONS.search(file.filename):
        raise ValidationError([{
            "field": field,
            "message": "Only image files are allowed! Supported formats: JPG, JPEG, PNG, GIF, WebP, BMP, TIFF, SVG, ICO, HEIC, HEIF",
        }])


def generate_filename(original_name, fieldname="featuredImage"):
    _, ext = os.path.splitext(secure_filename(original_name or ""))
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{fieldname}-{unique_suffix}{ext.lower()}"


class LocalImageStorage:
    """Guarda las imágenes en UPLOAD_FOLDER; se sirven desde /uploads/<filename>."""

    def __init__(self, folder):
        self.folder = folder

    def save(self, file, fieldname="featuredImage"):
        os.makedirs(self.folder, exist_ok=True)
        filename = generate_filename(file.filename, fieldname)
        file.save(os.path.join(self.folder, filename))
        logger.info("Stored image %s", filename)
        return filename

    def delete(self, stored):
        # solo borramos nombres generados por save, nunca rutas ni URLs
        if not stored or not GENERATED_FILENAME.match(stored):
            return False
        try:
            os.remove(os.path.join(self.folder, stored))
        except FileNotFoundError:
            return False
        logger.info("Deleted image %s", stored)
        return True


class CloudinaryImageStorage:
    """Sube las imágenes a Cloudinary y guarda la URL segura."""

    def __init__(self, cloud_name, api_key, api_secret, folder="blog_featured_images"):
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret)
        self.cloud_name = cloud_name
        self.folder = folder

    def save(self, file, fieldname="featuredImage"):
        result = cloudinary.uploader.upload(file, folder=self.folder, resource_type="image")
        url = result.get("secure_url")
        if not url:
            raise RuntimeError("Cloudinary did not return a URL")
        logger.info("Uploaded image to Cloudinary: %s", result.get("public_id"))
        return url

    def public_id(self, url):
        """public_id de una URL de nuestra cuenta de Cloudinary, o None si es externa."""
        if not is_absolute_url(url) or f"/{self.cloud_name}/" not in url:
            return None
        match = CLOUDINARY_PUBLIC_ID.search(url)
        return match.group(1) if match else None

    def delete(self, stored):
        public_id = self.public_id(stored)
        if not public_id:
            return False
        cloudinary.uploader.destroy(public_id, resource_type="image")
        logger.info("Deleted image from Cloudinary: %s", public_id)
        return True


def get_image_storage(app=None):
    app = app or current_app
    config = app.config
    if config.get("IMAGE_STORAGE") == "cloudinary":
        return CloudinaryImageStorage(
            config["CLOUDINARY_CLOUD_NAME"],
            config["CLOUDINARY_API_KEY"],
            config["CLOUDINARY_API_SECRET"],
        )
    return LocalImageStorage(config["UPLOAD_FOLDER"])


def store_image(file, field="featuredImage"):
    """Valida y guarda la imagen; devuelve el nombre generado o la URL absoluta."""
    validate_image(file, field)
    return get_image_storage().save(file, field)


def discard_image(stored):
    """Borra una imagen guardada. Un fallo acá se loguea y no corta la request."""
    if not stored:
        return False
    try:
        return get_image_storage().delete(stored)
    except Exception:
        logger.exception("Could not delete image %s", stored)
        return False
