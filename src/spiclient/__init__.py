"""spiclient -- Encrypted command client for the SPI core server.

This package loads an RSA key pair from PEM files, encrypts shell
commands with the public key and posts them over HTTPS to the core's
``/api/exec`` endpoint. The server response is handed back as text.
"""

__version__ = "0.1.0"
