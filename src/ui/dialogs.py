#!/usr/bin/env python3
"""
EduConfig - Dialogs
Lublin University of Technology

Message boxes shown during installation. In silent mode nothing is shown:
errors go to stderr and questions are never asked.
"""

import logging
import sys
from typing import Optional

from src.config import APP_NAME, UI_THEME

logger = logging.getLogger(__name__)


class UserInterface:
    """Dialog or console output, depending on silent mode"""

    def __init__(self, silent: bool):
        self.silent = silent
        self._root = None

    def _ensure_root(self):
        """Create the hidden window the message boxes belong to"""
        if self._root is None:
            import customtkinter as ctk

            ctk.set_appearance_mode(UI_THEME)
            self._root = ctk.CTk()
            self._root.title(APP_NAME)
            self._root.withdraw()
        return self._root

    def show_info(self, message: str):
        """Information dialog, nothing in silent mode"""
        logger.info(message)
        if self.silent:
            return

        import tkinter.messagebox as msgbox

        msgbox.showinfo(APP_NAME, message, parent=self._ensure_root())

    def show_error(self, message: str):
        """Error dialog, or a line on stderr in silent mode"""
        logger.error(message)
        if self.silent:
            print(message, file=sys.stderr)
            return

        import tkinter.messagebox as msgbox

        msgbox.showerror(APP_NAME, message, parent=self._ensure_root())

    def ask_yes_no(self, message: str) -> Optional[bool]:
        """
        Ask a Yes/No question

        Returns:
            True for Yes, False for No, None in silent mode where nobody is asked
        """
        if self.silent:
            return None

        import tkinter.messagebox as msgbox

        answer = msgbox.askyesno(APP_NAME, message, parent=self._ensure_root())
        logger.info("%s -> %s", message.splitlines()[0], "Yes" if answer else "No")
        return answer

    def close(self):
        """Destroy the hidden window if one was created"""
        if self._root is not None:
            self._root.destroy()
            self._root = None
