# storage.py
"""
Upload storage for avatars, property and maintenance images.

Files go to Azure Blob Storage when AZURE_STORAGE_ACCOUNT and
AZURE_STORAGE_KEY are set, otherwise under UPLOAD_DIR (served at /uploads).
"""
import logging
import os
import shutil
import uuid
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, List

from azure.storage.blob import BlobServiceClient

from config import get_settings

logger = logging.getLogger(__name__)

LOCAL_PREFIX = "/uploads/"


@lru_cache()
def _blob_service() -> BlobServiceClient:
     settings = get_settings()
     return BlobServiceClient.from_connection_string(
          f"DefaultEndpointsProtocol=https;"
          f"AccountName={settings.azure_storage_account};"
          f"AccountKey={settings.azure_storage_key};"
          f"EndpointSuffix=core.windows.net"
     )


def _object_name(upload, folder: str, owner_id) -> str:
     ext = os.path.splitext(upload.filename or "")[1].lower()
     return f"{folder}/{owner_id}/{uuid.uuid4()}{ext}"


def save_upload(upload, folder: str, owner_id) -> str:
     """
     Store an UploadFile and return its public URL.

     Args:
          upload: FastAPI UploadFile
          folder: Logical bucket (avatars, properties, maintenance)
          owner_id: User the file belongs to
     """
     settings = get_settings()
     name = _object_name(upload, folder, owner_id)

     if settings.use_azure_storage:
          container = settings.azure_storage_container
          blob_client = _blob_service().get_blob_client(container=container, blob=name)
          blob_client.upload_blob(upload.file, overwrite=True)
          return f"https://{settings.azure_storage_account}.blob.core.windows.net/{container}/{name}"

     path = os.path.join(settings.upload_dir, *name.split("/"))
     os.makedirs(os.path.dirname(path), exist_ok=True)
     with open(path, "wb") as buffer:
          shutil.copyfileobj(upload.file, buffer)
     return f"{LOCAL_PREFIX}{name}"


def delete_upload(url: str) -> None:
     """Remove a stored file by its public URL. Unknown URLs are ignored."""
     if not url:
          return
     settings = get_settings()

     if url.startswith(LOCAL_PREFIX):
          path = os.path.join(settings.upload_dir, *url[len(LOCAL_PREFIX):].split("/"))
          if os.path.exists(path):
               os.remove(path)
          return

     container = settings.azure_storage_container
     marker = f".blob.core.windows.net/{container}/"
     if settings.use_azure_storage and marker in url:
          blob_name = url.split(marker, 1)[1]
          _blob_service().get_blob_client(container=container, blob=blob_name).delete_blob()
          return
     logger.warning("Not deleting unmanaged upload %s", url)


@contextmanager
def saved_uploads(uploads, folder: str, owner_id) -> Iterator[List[str]]:
     """
     Save uploads for the duration of a block, removing them if it raises.

     Usage:
          with saved_uploads(files, "maintenance", user.id) as image_urls:
               MaintenanceService.create(..., image_urls=image_urls)
     """
     urls: List[str] = []
     try:
          for upload in uploads:
               urls.append(save_upload(upload, folder, owner_id))
          yield urls
     except Exception:
          for url in urls:
               delete_upload(url)
          raise
