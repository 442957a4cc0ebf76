#!/usr/bin/env python3
"""
EduConfig - WLAN Profile Builder
Lublin University of Technology

Builds the eduroam WPA2-Enterprise profile in the Windows WLANProfile schema,
or loads a ready-made profile when one is configured.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional
from xml.sax.saxutils import escape

from src.config.settings import (
    PROFILE_XML_PATH,
    WIFI_SERVER_NAMES,
    WIFI_SSID,
)
from src.utils.assets import AssetError

logger = logging.getLogger(__name__)

WLAN_PROFILE_NS = "http://www.microsoft.com/networking/WLAN/profile/v1"

# Windows natively supports PEAP with MSCHAPv2 inside, no third-party supplicant
EAP_TYPE_PEAP = 25
EAP_TYPE_MSCHAPV2 = 26


def format_thumbprint(thumbprint: str) -> str:
    """Format a hex thumbprint the way WLAN profiles store it: 'aa bb cc ...'"""
    digits = thumbprint.replace(" ", "").lower()
    return " ".join(digits[i : i + 2] for i in range(0, len(digits), 2))


def create_eduroam_profile(
    ca_thumbprint: str,
    ssid: str = WIFI_SSID,
    server_names: Optional[List[str]] = None,
) -> str:
    """
    Create the WPA2-Enterprise XML profile for eduroam

    The client accepts only a RADIUS server whose certificate chains to the
    installed root CA and whose name is one of the configured server names.
    """
    if server_names is None:
        server_names = WIFI_SERVER_NAMES

    name = escape(ssid)
    servers = escape(";".join(server_names))
    trusted_ca = format_thumbprint(ca_thumbprint)

    profile_xml = f"""<?xml version="1.0"?>
<WLANProfile xmlns="{WLAN_PROFILE_NS}">
    <name>{name}</name>
    <SSIDConfig>
        <SSID>
            <name>{name}</name>
        </SSID>
        <nonBroadcast>false</nonBroadcast>
    </SSIDConfig>
    <connectionType>ESS</connectionType>
    <connectionMode>auto</connectionMode>
    <autoSwitch>false</autoSwitch>
    <MSM>
        <security>
            <authEncryption>
                <authentication>WPA2</authentication>
                <encryption>AES</encryption>
                <useOneX>true</useOneX>
            </authEncryption>
            <PMKCacheMode>enabled</PMKCacheMode>
            <PMKCacheTTL>720</PMKCacheTTL>
            <PMKCacheSize>128</PMKCacheSize>
            <preAuthMode>disabled</preAuthMode>
            <OneX xmlns="http://www.microsoft.com/networking/OneX/v1">
                <cacheUserData>true</cacheUserData>
                <authMode>user</authMode>
                <EAPConfig>
                    <EapHostConfig xmlns="http://www.microsoft.com/provisioning/EapHostConfig">
                        <EapMethod>
                            <Type xmlns="http://www.microsoft.com/provisioning/EapCommon">{EAP_TYPE_PEAP}</Type>
                            <VendorId xmlns="http://www.microsoft.com/provisioning/EapCommon">0</VendorId>
                            <VendorType xmlns="http://www.microsoft.com/provisioning/EapCommon">0</VendorType>
                            <AuthorId xmlns="http://www.microsoft.com/provisioning/EapCommon">0</AuthorId>
                        </EapMethod>
                        <Config xmlns="http://www.microsoft.com/provisioning/EapHostConfig">
                            <Eap xmlns="http://www.microsoft.com/provisioning/BaseEapConnectionPropertiesV1">
                                <Type>{EAP_TYPE_PEAP}</Type>
                                <EapType xmlns="http://www.microsoft.com/provisioning/MsPeapConnectionPropertiesV1">
                                    <ServerValidation>
                                        <DisableUserPromptForServerValidation>false</DisableUserPromptForServerValidation>
                                        <ServerNames>{servers}</ServerNames>
                                        <TrustedRootCA>{trusted_ca}</TrustedRootCA>
                                    </ServerValidation>
                                    <FastReconnect>true</FastReconnect>
                                    <InnerEapOptional>false</InnerEapOptional>
                                    <Eap xmlns="http://www.microsoft.com/provisioning/BaseEapConnectionPropertiesV1">
                                        <Type>{EAP_TYPE_MSCHAPV2}</Type>
                                        <EapType xmlns="http://www.microsoft.com/provisioning/MsChapV2ConnectionPropertiesV1">
                                            <UseWinLogonCredentials>false</UseWinLogonCredentials>
                                        </EapType>
                                    </Eap>
                                    <EnableQuarantineChecks>false</EnableQuarantineChecks>
                                    <RequireCryptoBinding>false</RequireCryptoBinding>
                                    <PeapExtensions>
                                        <PerformServerValidation xmlns="http://www.microsoft.com/provisioning/MsPeapConnectionPropertiesV2">true</PerformServerValidation>
                                        <AcceptServerName xmlns="http://www.microsoft.com/provisioning/MsPeapConnectionPropertiesV2">true</AcceptServerName>
                                    </PeapExtensions>
                                </EapType>
                            </Eap>
                        </Config>
                    </EapHostConfig>
                </EAPConfig>
            </OneX>
        </security>
    </MSM>
</WLANProfile>"""
    return profile_xml


def load_profile(path: Path) -> str:
    """Load a ready-made WLANProfile XML file and check that it is one"""
    try:
        profile_xml = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise AssetError(f"Cannot read WLAN profile {path}: {e}") from e

    try:
        root = ET.fromstring(profile_xml)
    except ET.ParseError as e:
        raise AssetError(f"WLAN profile {path} is not valid XML: {e}") from e

    if root.tag != f"{{{WLAN_PROFILE_NS}}}WLANProfile":
        raise AssetError(f"{path} is not a WLANProfile document (root is {root.tag})")

    return profile_xml


def get_profile_xml(ca_thumbprint: str, override: Optional[str] = PROFILE_XML_PATH) -> str:
    """Profile to install: the configured file if any, else the generated one"""
    if override:
        logger.info("Using WLAN profile from %s", override)
        return load_profile(Path(override))
    return create_eduroam_profile(ca_thumbprint)
