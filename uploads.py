"""
Temporary storage for uploaded background images.

The working directory is created once when the storage is attached to the app
(`init_app`); each request writes at most one file into it and the file is
removed again through `discard` once the response is done.
"""
from dataclasses import dataclass
import os
import logging

from utils import upload_filename


@dataclass
class StoredUpload:
    path: str
    field_name: str
    extension: str
    mimetype: str
    discarded: bool = False


class UploadStorage:
    """Flask extension owning the upload working directory."""

    def __init__(self, app=None):
        self.folder = None
        self._initialized = False
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        folder = app.config.get('UPLOAD_FOLDER')
        if not folder:
            raise RuntimeError('UPLOAD_FOLDER is not configured')
        os.makedirs(folder, exist_ok=True)
        self.folder = folder
        self._initialized = True
        app.extensions['upload_storage'] = self
        logging.info('[UPLOAD] Working directory ready at %s', folder)

    @property
    def ready(self) -> bool:
        return self._initialized and os.path.isdir(self.folder)

    def save(self, file_storage, field_name: str) -> StoredUpload:
        """Write an incoming werkzeug FileStorage to the working directory."""
        if not self.ready:
            raise RuntimeError('Upload storage is not initialized')
        filename = upload_filename(field_name, file_storage.filename)
        path = os.path.join(self.folder, filename)
        try:
            file_storage.save(path)
        except OSError:
            logging.exception('[UPLOAD] Failed to store %s at %s', field_name, path)
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            raise
        upload = StoredUpload(
            path=path,
            field_name=field_name,
            extension=os.path.splitext(filename)[1],
            mimetype=file_storage.mimetype or '',
        )
        logging.info('[UPLOAD] Stored %s (%s) at %s', field_name, upload.mimetype, path)
        return upload

    def discard(self, upload) -> None:
        """Delete a stored upload once; failures are logged and never raised."""
        if upload is None or upload.discarded:
            return
        upload.discarded = True
        try:
            os.remove(upload.path)
            logging.info('[UPLOAD CLEANUP] Deleted %s', upload.path)
        except FileNotFoundError:
            pass
        except OSError:
            logging.exception('[UPLOAD CLEANUP] Failed to delete uploaded image %s', upload.path)
