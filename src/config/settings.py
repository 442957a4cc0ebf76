#!/usr/bin/env python3
"""
EduConfig - Configuration Settings
Lublin University of Technology

All the configuration constants and settings for the app.
Network profile values, external tools, timeouts, file paths and messages.
"""

import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Application Information
APP_NAME = "EduConfig"
VERSION = "1.0.0"
COPYRIGHT = "Copyright (C) Politechnika Lubelska 2013, Marcin Badurowicz"

# Network Configuration
WIFI_SSID = "eduroam"
# RADIUS server names the client accepts during PEAP server validation
WIFI_SERVER_NAMES = ["radius.pollub.pl"]

# External Tools
CERT_TOOL = "certutil"
WLAN_TOOL = "netsh"
CERT_STORE = "Root"

# Supported platform floor (Windows NT 6.x = Vista and later)
MIN_WINDOWS_MAJOR = 6

# UI Configuration
UI_THEME = "system"

# File Paths
APP_DIR = Path(__file__).parent.parent.parent
ASSETS_DIR = APP_DIR / "assets"
CA_CERT_FILE = ASSETS_DIR / "ca_cert.der"
DATA_DIR = Path(tempfile.gettempdir()) / APP_NAME
LOGS_DIR = DATA_DIR / "logs"

# Logging Configuration
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_FILE = "educonfig.log"
LOG_LEVEL = "INFO"
MAX_LOG_SIZE_MB = 5
LOG_BACKUP_COUNT = 3

# Platform-Specific Settings
WINDOWS_SETTINGS = {
    "cert_suffix": ".der",
    "profile_suffix": ".xml",
    "temp_prefix": "educonfig_",
    "profile_scope": "all",
    # ShellExecute show command for the external tools and relaunch
    "show_window": 0,  # SW_HIDE
}

# Status Messages
STATUS_MESSAGES = {
    "need_admin": "Requesting administrator privileges...",
    "installing_cert": "Installing root CA certificate...",
    "installing_profile": "Installing eduroam network profile...",
}

# Error Messages
ERROR_MESSAGES = {
    "need_admin": (
        "Administrator privileges are required to configure the eduroam network.\n"
        "The application will now close."
    ),
    "system_not_supported": (
        "Your operating system is not officially supported.\n"
        "Do you want to continue anyway?"
    ),
    "cert_failed": "Installing the root CA certificate failed. Error code:",
    "profile_failed": "Installing the eduroam network profile failed. Error code:",
    "unhandled_exception": "An unexpected error occurred:",
}

# Success Messages
SUCCESS_MESSAGES = {
    "info": (
        "This program will configure your computer for the eduroam wireless network.\n"
        "The root CA certificate and the eduroam profile will be installed.\n\n"
        "Do you want to continue?"
    ),
    "success": (
        "The eduroam network has been configured successfully.\n"
        "Connect to eduroam and sign in with your university account."
    ),
}

HELP_TEXT = """Usage: educonfig [options]

Options:
  /s, /silent     Silent mode, no dialogs are shown; errors go to stderr
  /?, --help      Show this help and exit
  --version       Show version information and exit
  --check         Check system readiness and exit
  --debug         Enable verbose logging
  --cert PATH     Root CA certificate file (DER or PEM)
  --profile PATH  Ready-made WLAN profile XML used instead of the generated one
  --timeout SEC   Seconds to wait for each external tool

Exit code is a sum of flags:
  0   no error
  1   certificate installation failed
  2   network profile installation failed
  4   operating system not supported
  8   administrator privileges not granted
  16  unexpected error"""

# Environment Overrides
# The same values can be given with --cert, --profile, --timeout and --debug,
# which are forwarded to the elevated instance; the environment is not.
DEBUG_MODE = os.getenv("EDUCONFIG_DEBUG", "false").lower() == "true"
CA_CERT_OVERRIDE = os.getenv("EDUCONFIG_CA_CERT") or None
CA_CERT_PATH = Path(CA_CERT_OVERRIDE) if CA_CERT_OVERRIDE else CA_CERT_FILE
PROFILE_XML_PATH = os.getenv("EDUCONFIG_PROFILE_XML") or None


def parse_timeout(value: Optional[str]) -> Optional[float]:
    """
    Parse a tool timeout in seconds

    Returns None (wait until the tool exits) for an empty, malformed, infinite or
    non-positive value.
    """
    if not value:
        return None

    try:
        seconds = float(value)
    except ValueError:
        logger.warning("Ignoring invalid tool timeout %r", value)
        return None

    if not math.isfinite(seconds) or seconds <= 0:
        logger.warning("Ignoring out of range tool timeout %r", value)
        return None

    return seconds


TOOL_TIMEOUT = parse_timeout(os.getenv("EDUCONFIG_TOOL_TIMEOUT"))
