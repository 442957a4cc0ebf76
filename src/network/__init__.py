#!/usr/bin/env python3
"""
EduConfig - Network Package
Lublin University of Technology

Network configuration package: root CA certificate and eduroam WLAN profile.
"""

import logging
from pathlib import Path
from typing import Optional

from src.config import ERROR_MESSAGES, SUCCESS_MESSAGES, ExitCode
from src.config.settings import PROFILE_XML_PATH, TOOL_TIMEOUT
from src.network.cert_manager import install_ca_certificate
from src.network.profile_builder import (
    create_eduroam_profile,
    format_thumbprint,
    get_profile_xml,
    load_profile,
)
from src.network.wifi_manager import install_profile
from src.ui import UserInterface
from src.utils.assets import certificate_thumbprint, load_ca_certificate

logger = logging.getLogger(__name__)

__version__ = "1.0.0"
__author__ = "Politechnika Lubelska"
__description__ = "Network configuration for EduConfig"

__all__ = [
    "install_ca_certificate",
    "install_profile",
    "create_eduroam_profile",
    "format_thumbprint",
    "get_profile_xml",
    "load_profile",
    "aggregate_exit_code",
    "EduroamInstaller",
]


def aggregate_exit_code(cert_result: int, profile_result: int) -> ExitCode:
    """Map tool exit codes to failure flags; only pass/fail of each step is kept"""
    exit_code = ExitCode.NoError
    if cert_result != 0:
        exit_code |= ExitCode.CertInstallError
    if profile_result != 0:
        exit_code |= ExitCode.ProfileInstallError
    return exit_code


class EduroamInstaller:
    """
    Installs the root CA certificate and then the eduroam profile

    Both steps always run; a failed certificate install does not stop the
    profile install.
    """

    def __init__(
        self,
        ui: UserInterface,
        timeout: Optional[float] = TOOL_TIMEOUT,
        cert_path: Optional[Path] = None,
        profile_path: Optional[str] = PROFILE_XML_PATH,
    ):
        self.ui = ui
        self.timeout = timeout
        self.cert_path = cert_path
        self.profile_path = profile_path

    def install(self) -> ExitCode:
        """
        Run both installation steps

        Returns:
            ExitCode: combined failure flags, NoError if both steps succeeded
        """
        der = load_ca_certificate(self.cert_path)
        thumbprint = certificate_thumbprint(der)
        logger.info("Root CA thumbprint %s", thumbprint)
        profile_xml = get_profile_xml(thumbprint, self.profile_path)

        cert_result = install_ca_certificate(der, timeout=self.timeout)
        if cert_result != 0:
            self.ui.show_error(f"{ERROR_MESSAGES['cert_failed']} {cert_result}")

        profile_result = install_profile(profile_xml, timeout=self.timeout)
        if profile_result != 0:
            self.ui.show_error(f"{ERROR_MESSAGES['profile_failed']} {profile_result}")

        exit_code = aggregate_exit_code(cert_result, profile_result)
        if exit_code == ExitCode.NoError:
            self.ui.show_info(SUCCESS_MESSAGES["success"])

        return exit_code
