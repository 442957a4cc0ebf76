#!/usr/bin/env python3
"""
EduConfig - Certificate Manager
Lublin University of Technology

Installs the eduroam RADIUS root CA into the machine's Trusted Root
Certification Authorities store with certutil.
"""

import logging
from typing import Optional

from src.config.settings import CERT_STORE, CERT_TOOL, STATUS_MESSAGES, WINDOWS_SETTINGS
from src.utils.assets import materialize_asset
from src.utils.system_utils import run_elevated

logger = logging.getLogger(__name__)


def install_ca_certificate(der: bytes, timeout: Optional[float] = None) -> int:
    """
    Install a DER certificate into the Root store

    Returns:
        int: certutil exit code, 0 on success
    """
    logger.info(STATUS_MESSAGES["installing_cert"])
    with materialize_asset(der, WINDOWS_SETTINGS["cert_suffix"]) as cert_file:
        return run_elevated(
            CERT_TOOL, f'-addstore {CERT_STORE} "{cert_file}"', timeout=timeout
        )
