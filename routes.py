"""
Routes for the certificate service, using a Flask Blueprint.
"""
from flask import Blueprint, request, current_app, make_response
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge
from functools import partial
from urllib.parse import quote
import logging

from certificate import CertificateRequest, RenderError, ValidationError
from generate_certificate import render_certificate
from utils import attachment_filename

main_bp = Blueprint('main', __name__)

BACKGROUND_FIELD = 'bgImage'


def _text(message, status=200):
    resp = make_response(message, status)
    resp.mimetype = 'text/plain'
    return resp


def _submitted_fields():
    """Text fields from a multipart/urlencoded form, or from a JSON object body."""
    if request.form:
        return request.form
    if request.is_json:
        payload = request.get_json(silent=True)
        if isinstance(payload, dict):
            return payload
    return {}


def _content_disposition(filename):
    # Non-ASCII or control characters (CR/LF included) cannot go in a plain header value
    if all(32 <= ord(ch) < 127 for ch in filename):
        return f'attachment; filename={filename}'
    return f"attachment; filename*=UTF-8''{quote(filename)}"


def _deliver_pdf(pdf_bytes, name):
    response = make_response(pdf_bytes)
    response.headers['Content-Type'] = 'application/pdf'
    response.headers['Content-Disposition'] = _content_disposition(attachment_filename(name))
    return response


# Health check
@main_bp.route('/')
def index():
    storage = current_app.extensions.get('upload_storage')
    if storage is None or not storage.ready:
        return _text('Upload storage not ready', 503)
    return _text('API is working!')


@main_bp.route('/generate-certificate', methods=['POST'])
def generate_certificate():
    logging.info('[CERTIFICATE] Received certificate generation request')
    storage = current_app.extensions['upload_storage']
    upload = None
    # Once the response owns the upload, cleanup runs when it is closed
    deferred = False
    try:
        file = request.files.get(BACKGROUND_FIELD)
        if file is not None and file.filename:
            upload = storage.save(file, BACKGROUND_FIELD)

        fields = _submitted_fields()
        logging.info('[CERTIFICATE] Data: name=%r course=%r date=%r',
                     fields.get('name'), fields.get('course'), fields.get('date'))
        cert_request = CertificateRequest.from_fields(fields, upload)

        pdf = render_certificate(cert_request.name, cert_request.course, cert_request.date,
                                 cert_request.background_path)

        response = _deliver_pdf(pdf, cert_request.name)
        response.call_on_close(partial(storage.discard, upload))
        deferred = True
        logging.info('[CERTIFICATE] Generated %d bytes for %r', len(pdf), cert_request.name)
        return response
    except ValidationError as e:
        logging.warning('[CERTIFICATE] Rejected request: %s', e.message)
        return _text(e.message, e.status_code)
    except RenderError as e:
        logging.exception('[CERTIFICATE] Error generating certificate')
        return _text(e.message, e.status_code)
    finally:
        if not deferred:
            storage.discard(upload)


@main_bp.app_errorhandler(Exception)
def unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    logging.exception('[CERTIFICATE] Unhandled error')
    return _text('Error generating certificate', 500)


@main_bp.app_errorhandler(RequestEntityTooLarge)
def upload_too_large(e):
    limit = current_app.config.get('MAX_CONTENT_LENGTH')
    logging.warning('[UPLOAD] Rejected upload larger than %s bytes', limit)
    return _text('Uploaded file is too large.', 413)
