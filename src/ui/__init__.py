#!/usr/bin/env python3
"""
EduConfig - UI Package
Lublin University of Technology

Message boxes for interactive runs, console output for silent runs.
"""

from src.ui.dialogs import UserInterface

__version__ = "1.0.0"
__author__ = "Politechnika Lubelska"
__description__ = "Dialogs for EduConfig"

__all__ = ["UserInterface"]
