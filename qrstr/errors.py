"""Exceptions raised by qrstr.

Failures from the ``qrcode`` generator are not wrapped and reach the caller
unchanged. Data too long for the chosen level surfaces as
``qrcode.exceptions.DataOverflowError`` on qrcode 7 and as ``ValueError``
("Invalid version") on qrcode 8.
"""


class QRStrError(Exception):
    """Base class for qrstr errors."""


class InvalidConfigurationError(QRStrError, ValueError):
    """Unknown render mode or error-correction level given to the factory."""


class MisconfiguredEncoderError(QRStrError, RuntimeError):
    """A renderer was invoked without the palette or grid it needs."""

    def __init__(self, message: str = "encoder misconfigured, use new_encoder when creating it"):
        super().__init__(message)
