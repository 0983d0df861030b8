from flask import Flask
from flask_cors import CORS
from uploads import UploadStorage
from routes import main_bp
import os
import logging

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

DEFAULT_CORS_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    'https://certificate-frontend-eight.vercel.app',
]


def _cors_origins_from_env():
    raw = os.environ.get('CORS_ORIGINS')
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


def create_app(config=None):
    """Build the Flask app; `config` overrides values read from the environment."""
    app = Flask(__name__)

    app.config['UPLOAD_FOLDER'] = os.environ.get('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'uploads'))
    app.config['CORS_ORIGINS'] = _cors_origins_from_env()
    app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_UPLOAD_MB', '10')) * 1024 * 1024
    if config:
        app.config.update(config)

    logging.info(f"Using upload folder: {app.config['UPLOAD_FOLDER']}")

    # Initialize extensions
    UploadStorage(app)
    CORS(app, origins=app.config['CORS_ORIGINS'], methods=['GET', 'POST'])

    app.register_blueprint(main_bp)
    return app


app = create_app()

if __name__ == '__main__':
    from dev_config import get_dev_config
    logging.basicConfig(level=logging.INFO)
    server = get_dev_config()
    app.run(
        host=server['host'],
        port=server['port'],
        debug=server['debug'],
        threaded=server['threaded'],
        use_reloader=server['use_reloader']
    )
