# healthsrv/server.py
import logging
import sys

from werkzeug.serving import make_server

from . import create_app
from .config import LISTEN_HOST, LISTEN_PORT, listen_addr
from .logger import init_logger


def main():
    """
    Start the health server on :8000 and block.

    A bind failure is logged as "Server failed to start" and exits with
    status 1.
    """
    log = init_logger()
    app = create_app(log)

    # The middleware already logs each request; keep werkzeug's own
    # access lines off the console.
    logging.getLogger("werkzeug").setLevel(logging.ERROR)

    addr = listen_addr()
    print(f"Server is running on port {addr}")
    print(f"Try visiting http://localhost:{LISTEN_PORT}/health to check if the server is running")

    try:
        server = make_server(LISTEN_HOST, LISTEN_PORT, app, threaded=True)
    except OSError as e:
        log.error("Server failed to start", e, "addr", addr)
        sys.exit(1)
    except SystemExit:
        # werkzeug reports the bind error on stderr and exits by itself
        log.error("Server failed to start", RuntimeError(f"could not listen on {addr}, see stderr for details"), "addr", addr)
        sys.exit(1)

    server.serve_forever()
