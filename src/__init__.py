#!/usr/bin/env python3
"""
EduConfig - Source Package
Lublin University of Technology

Main source package for the eduroam configuration application.
"""

__version__ = "1.0.0"
__author__ = "Politechnika Lubelska"
__description__ = "EduConfig - eduroam wireless network configuration for Windows"

# Package metadata
__all__ = ["__version__", "__author__", "__description__"]
