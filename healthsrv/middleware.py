# healthsrv/middleware.py
import time

from werkzeug.wsgi import ClosingIterator


class StatusCapture:
    """
    Stands in for the server's start_response: remembers the status code
    and forwards the call untouched.
    """

    def __init__(self, start_response, default: int = 200):
        self._start_response = start_response
        self.status_code = default

    def __call__(self, status, headers, exc_info=None):
        self.status_code = int(status.split(" ", 1)[0])
        return self._start_response(status, headers, exc_info)


class RequestLoggingMiddleware:
    """
    WSGI wrapper that times every request and logs it when the server
    closes the response, i.e. after the body has been sent. Exceptions
    raised by the wrapped app are not caught here.
    """

    def __init__(self, app, logger):
        self.app = app
        self.logger = logger

    def __call__(self, environ, start_response):
        started = time.perf_counter()
        capture = StatusCapture(start_response)

        def log_request():
            self.logger.request(
                environ.get("REQUEST_METHOD", ""),
                environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", ""),
                environ.get("REMOTE_ADDR", ""),
                capture.status_code,
                time.perf_counter() - started,
            )

        return ClosingIterator(self.app(environ, capture), [log_request])
