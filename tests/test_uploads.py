import os
import logging
from io import BytesIO
import pytest
from flask import Flask
from werkzeug.datastructures import FileStorage

from uploads import StoredUpload, UploadStorage


@pytest.fixture()
def storage(tmp_path):
    app = Flask(__name__)
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'work')
    return UploadStorage(app)


def _file(content=b'data', filename='bg.png', content_type='image/png'):
    return FileStorage(stream=BytesIO(content), filename=filename, content_type=content_type)


def test_init_creates_folder_and_registers(tmp_path):
    app = Flask(__name__)
    folder = tmp_path / 'nested' / 'uploads'
    app.config['UPLOAD_FOLDER'] = str(folder)
    storage = UploadStorage()
    assert not storage.ready
    storage.init_app(app)
    assert folder.is_dir()
    assert storage.ready
    assert app.extensions['upload_storage'] is storage


def test_init_requires_folder():
    app = Flask(__name__)
    with pytest.raises(RuntimeError):
        UploadStorage(app)


def test_not_ready_when_folder_removed(storage):
    os.rmdir(storage.folder)
    assert not storage.ready


def test_save_writes_file(storage):
    upload = storage.save(_file(b'png-bytes'), 'bgImage')
    assert os.path.dirname(upload.path) == storage.folder
    assert upload.field_name == 'bgImage'
    assert upload.extension == '.png'
    assert upload.mimetype == 'image/png'
    with open(upload.path, 'rb') as fh:
        assert fh.read() == b'png-bytes'


def test_discard_removes_file_once(storage):
    upload = storage.save(_file(), 'bgImage')
    storage.discard(upload)
    assert upload.discarded
    assert not os.path.exists(upload.path)
    # second call is a no-op
    storage.discard(upload)
    assert os.listdir(storage.folder) == []


def test_discard_none_is_noop(storage):
    storage.discard(None)


def test_discard_missing_file_is_quiet(storage, caplog):
    upload = StoredUpload(path=os.path.join(storage.folder, 'gone.png'), field_name='bgImage', extension='.png', mimetype='image/png')
    with caplog.at_level(logging.ERROR):
        storage.discard(upload)
    assert upload.discarded
    assert caplog.records == []


def test_discard_failure_is_logged_not_raised(storage, monkeypatch, caplog):
    upload = storage.save(_file(), 'bgImage')

    def refuse(path):
        raise PermissionError('read-only')

    monkeypatch.setattr(os, 'remove', refuse)
    with caplog.at_level(logging.ERROR):
        storage.discard(upload)
    assert upload.discarded
    assert any('[UPLOAD CLEANUP]' in r.getMessage() for r in caplog.records)


def test_save_failure_removes_partial_file(storage, monkeypatch):
    def partial_write(self, dst, buffer_size=16384):
        with open(dst, 'wb') as fh:
            fh.write(b'half')
        raise OSError('disk full')

    monkeypatch.setattr(FileStorage, 'save', partial_write)
    with pytest.raises(OSError):
        storage.save(_file(), 'bgImage')
    assert os.listdir(storage.folder) == []
