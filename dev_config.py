"""
Development Configuration for the Certificate Service
=====================================================

Server settings used by run_server.py, with environment overrides.
"""

import os

# Development server settings
DEV_CONFIG = {
    'host': '0.0.0.0',
    'port': 5051,
    'debug': False,
    'threaded': True,
    'use_reloader': False
}

TRUTHY = ('true', '1', 'yes', 'on')


def get_dev_config():
    """Returns development configuration with environment overrides"""
    config = DEV_CONFIG.copy()

    # Override with environment variables if present
    if 'PORT' in os.environ:
        config['port'] = int(os.environ['PORT'])

    if 'FLASK_DEBUG' in os.environ:
        config['debug'] = os.environ['FLASK_DEBUG'].lower() in TRUTHY
        config['use_reloader'] = config['debug']

    if 'FLASK_HOST' in os.environ:
        config['host'] = os.environ['FLASK_HOST']

    return config


def print_startup_banner(config, app=None):
    """Print a helpful startup banner"""
    print("=" * 70)
    print("CERTIFICATE SERVICE - DEVELOPMENT SERVER")
    print("=" * 70)
    print(f"URL: http://{config['host']}:{config['port']}")
    print(f"Debug: {config['debug']}")
    print(f"Auto-reload: {config['use_reloader']}")
    if app is not None:
        print(f"Upload folder: {app.config['UPLOAD_FOLDER']}")
        print(f"Allowed origins: {', '.join(app.config['CORS_ORIGINS'])}")
    print("=" * 70)
    print("Tips:")
    print("   - Press Ctrl+C to stop the server")
    print("   - Set FLASK_DEBUG=1 for debug mode")
    print("   - Set PORT=8000 for custom port")
    print("   - Set CORS_ORIGINS=https://a.example,https://b.example to change allowed origins")
    print("=" * 70)


if __name__ == '__main__':
    print_startup_banner(get_dev_config())
