#!/usr/bin/env python3
"""
Flask Application Runner
========================

Main entry point for running the certificate service.

Usage:
    python run_server.py           # Run with default settings
    python run_server.py --debug   # Run in debug mode
    python run_server.py --port 8000  # Run on custom port

Environment Variables:
    PORT          - Server port (default: 5051)
    FLASK_DEBUG   - Enable debug mode (default: False)
    FLASK_HOST    - Interface to bind (default: 0.0.0.0)
    UPLOAD_FOLDER - Working directory for uploaded background images
    CORS_ORIGINS  - Comma-separated list of allowed browser origins
    MAX_UPLOAD_MB - Largest accepted request body in MiB (default: 10)
"""

import sys
import logging
import argparse
from pathlib import Path

from dev_config import get_dev_config, print_startup_banner


def setup_environment():
    """Ensure the app directory is in the Python path"""
    app_dir = Path(__file__).parent
    if str(app_dir) not in sys.path:
        sys.path.insert(0, str(app_dir))


def check_requirements():
    """Check if required packages are installed"""
    required_packages = ['flask', 'flask_cors', 'reportlab', 'werkzeug']
    missing = []

    for package in required_packages:
        try:
            __import__(package)
        except ImportError:
            missing.append(package)

    if missing:
        print(f"Missing required packages: {', '.join(missing)}")
        print("Install them with: pip install -e .")
        return False
    return True


def main():
    """Main entry point for the Flask application"""
    parser = argparse.ArgumentParser(description='Run the certificate generation service')
    parser.add_argument('--port', type=int, default=None, help='Port to run on')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--host', default=None, help='Host to bind to')

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')
    setup_environment()

    if not check_requirements():
        sys.exit(1)

    config = get_dev_config()
    if args.port:
        config['port'] = args.port
    if args.host:
        config['host'] = args.host
    if args.debug:
        config['debug'] = True
        config['use_reloader'] = True

    try:
        from app import create_app
        app = create_app()

        print_startup_banner(config, app)

        # Print the route map to help diagnose 404s
        rules = sorted(f"{r.rule} -> {','.join(sorted(r.methods))}" for r in app.url_map.iter_rules())
        print("Registered routes:")
        for line in rules:
            print("  -", line)

        app.run(
            host=config['host'],
            port=config['port'],
            debug=config['debug'],
            threaded=config['threaded'],
            use_reloader=config['use_reloader']
        )

    except ImportError as e:
        print(f"Failed to import Flask app: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nServer stopped by user")
    except OSError as e:
        print(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
