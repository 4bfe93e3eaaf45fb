# healthsrv/__init__.py
from flask import Flask

from .logger import get_logger
from .middleware import RequestLoggingMiddleware
from .routes.health import bp as health_bp

__version__ = "0.1.0"

def create_app(logger=None):
    app = Flask(__name__)
    app.register_blueprint(health_bp)

    # Every request gets one "HTTP Request" line from the middleware.
    app.wsgi_app = RequestLoggingMiddleware(app.wsgi_app, logger or get_logger())
    return app
