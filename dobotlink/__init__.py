"""Dobot and DobotV3 serial protocol framing, hex-text commands and firmware field checks."""

__version__ = "1.1.0"