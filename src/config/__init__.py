#!/usr/bin/env python3
"""
EduConfig - Configuration Package
Lublin University of Technology

Configuration management for the application.
"""

from src.config.settings import *
from src.config.exit_codes import ExitCode

__version__ = "1.0.0"
__author__ = "Politechnika Lubelska"
__description__ = "Configuration management for EduConfig"

# Expose main configuration items for easy access
__all__ = [
    "APP_NAME",
    "VERSION",
    "COPYRIGHT",
    "WIFI_SSID",
    "WIFI_SERVER_NAMES",
    "CERT_TOOL",
    "WLAN_TOOL",
    "CERT_STORE",
    "MIN_WINDOWS_MAJOR",
    "HELP_TEXT",
    "UI_THEME",
    "STATUS_MESSAGES",
    "ERROR_MESSAGES",
    "SUCCESS_MESSAGES",
    "WINDOWS_SETTINGS",
    "DEBUG_MODE",
    "CA_CERT_OVERRIDE",
    "PROFILE_XML_PATH",
    "TOOL_TIMEOUT",
    "parse_timeout",
    "ExitCode",
]
