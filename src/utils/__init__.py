#!/usr/bin/env python3
"""
EduConfig - Utilities Package
Lublin University of Technology

Utility modules for system operations, installation assets and logging.
"""

from src.utils.system_utils import (
    SystemInfo,
    PrivilegeManager,
    ProcessManager,
    PathManager,
    ElevationError,
    ToolExecutionError,
    system_info,
    privilege_manager,
    process_manager,
    path_manager,
    is_admin,
    is_supported_system,
    request_admin_elevation,
    run_elevated,
)

from src.utils.assets import (
    AssetError,
    load_ca_certificate,
    certificate_thumbprint,
    materialize_asset,
)

from src.utils.logger import setup_logging

__version__ = "1.0.0"
__author__ = "Politechnika Lubelska"
__description__ = "System utilities for EduConfig"

# Expose main utility classes and functions
__all__ = [
    # System utilities
    "SystemInfo",
    "PrivilegeManager",
    "ProcessManager",
    "PathManager",
    "ElevationError",
    "ToolExecutionError",
    "system_info",
    "privilege_manager",
    "process_manager",
    "path_manager",
    "is_admin",
    "is_supported_system",
    "request_admin_elevation",
    "run_elevated",
    # Assets
    "AssetError",
    "load_ca_certificate",
    "certificate_thumbprint",
    "materialize_asset",
    # Logging
    "setup_logging",
]
