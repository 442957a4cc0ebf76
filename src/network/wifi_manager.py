#!/usr/bin/env python3
"""
EduConfig - WiFi Manager
Lublin University of Technology

Registers the eduroam WLAN profile for all users with netsh.
"""

import logging
from typing import Optional

from src.config.settings import STATUS_MESSAGES, WINDOWS_SETTINGS, WLAN_TOOL
from src.utils.assets import materialize_asset
from src.utils.system_utils import run_elevated

logger = logging.getLogger(__name__)


def install_profile(profile_xml: str, timeout: Optional[float] = None) -> int:
    """
    Add a WLAN profile from its XML document

    Returns:
        int: netsh exit code, 0 on success
    """
    logger.info(STATUS_MESSAGES["installing_profile"])
    with materialize_asset(profile_xml, WINDOWS_SETTINGS["profile_suffix"]) as profile_file:
        return run_elevated(
            WLAN_TOOL,
            f'wlan add profile filename="{profile_file}" user={WINDOWS_SETTINGS["profile_scope"]}',
            timeout=timeout,
        )
