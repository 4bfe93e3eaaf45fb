# healthsrv/__main__.py
from .server import main

main()
