"""
Storage Gateways
================

Image upload with cloud (DigitalOcean Spaces) / local branching.
Callers make filenames unique with unique_filename() before uploading,
so neither backend overwrites on collision.
"""

import os
import secrets
import time

from .errors import UploadError
from .gateways import StorageGateway
from .logging_service import LoggingService

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
}


def file_extension(filename):
    return filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''


def allowed_file(filename):
    return file_extension(filename) in ALLOWED_EXTENSIONS


def unique_filename(original_name):
    """Random token and millisecond timestamp ahead of the original extension,
    e.g. "k3j9x0q1ab-1718000000000.png"."""
    token = secrets.token_hex(6)
    stamp = int(time.time() * 1000)
    ext = original_name.rsplit('.', 1)[-1] if '.' in original_name else 'bin'
    return f"{token}-{stamp}.{ext}"


class LocalStorageGateway(StorageGateway):
    """Save to a local static folder served under url_prefix"""

    def __init__(self, root, url_prefix='/static'):
        self.root = root
        self.url_prefix = url_prefix.rstrip('/')

    async def upload(self, namespace, filename, data):
        path = f"{namespace}/{filename}"
        upload_dir = os.path.join(self.root, namespace)
        try:
            os.makedirs(upload_dir, exist_ok=True)
            with open(os.path.join(upload_dir, filename), 'xb') as f:
                f.write(data)
        except FileExistsError as e:
            raise UploadError(f"File already exists: {path}") from e
        except OSError as e:
            LoggingService.error('storage', f"Local upload failed for {path}", {'error': str(e)})
            raise UploadError(f"Failed to store {path}: {e}") from e
        return path

    def public_url(self, path):
        return f"{self.url_prefix}/{path.lstrip('/')}"


class SpacesStorageGateway(StorageGateway):
    """Upload to DigitalOcean Spaces via boto3"""

    def __init__(self, region, space_name, access_key, secret_key, folder='site-images'):
        self.region = region
        self.space_name = space_name
        self.access_key = access_key
        self.secret_key = secret_key
        self.folder = folder
        self._client = None

    def _get_client(self):
        if self._client is None:
            import boto3
            self._client = boto3.client(
                's3',
                region_name=self.region,
                endpoint_url=f"https://{self.region}.digitaloceanspaces.com",
                aws_access_key_id=self.access_key,
                aws_secret_access_key=self.secret_key,
            )
        return self._client

    def _object_key(self, path):
        return f"{self.folder}/{path.lstrip('/')}"

    async def upload(self, namespace, filename, data):
        from botocore.exceptions import BotoCoreError, ClientError

        path = f"{namespace}/{filename}"
        content_type = CONTENT_TYPES.get(file_extension(filename), 'application/octet-stream')
        try:
            self._get_client().put_object(
                Bucket=self.space_name,
                Key=self._object_key(path),
                Body=data,
                ACL='public-read',
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            LoggingService.error('storage', f"Spaces upload failed for {path}", {'error': str(e)})
            raise UploadError(f"Failed to upload {path}: {e}") from e
        return path

    def public_url(self, path):
        return f"https://{self.space_name}.{self.region}.digitaloceanspaces.com/{self._object_key(path)}"


def build_storage_gateway(config, static_folder):
    """Pick the storage backend from STORAGE_TYPE ('local' or 'cloud')"""
    if config.get('STORAGE_TYPE', 'local') == 'cloud':
        return SpacesStorageGateway(
            region=config.get('DO_SPACES_REGION'),
            space_name=config.get('DO_SPACES_NAME'),
            access_key=config.get('DO_SPACES_KEY'),
            secret_key=config.get('DO_SPACES_SECRET'),
            folder=config.get('SPACES_FOLDER', 'site-images'),
        )
    return LocalStorageGateway(static_folder, '/static')
