#!/usr/bin/env python3
"""
EduConfig - System Utilities
Lublin University of Technology

System utilities for detecting the OS, checking privileges, relaunching with
elevation and running the external configuration tools.
"""

import ctypes
import logging
import os
import platform
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from src.config.settings import (
    APP_DIR,
    APP_NAME,
    LOGS_DIR,
    MIN_WINDOWS_MAJOR,
    WINDOWS_SETTINGS,
)

logger = logging.getLogger(__name__)

SEE_MASK_NOCLOSEPROCESS = 0x00000040
SEE_MASK_NOASYNC = 0x00000100
INFINITE = 0xFFFFFFFF
WAIT_TIMEOUT = 0x00000102

# Windows privilege check and ShellExecuteEx plumbing
if platform.system() == "Windows":
    import ctypes.wintypes as wintypes

    class SHELLEXECUTEINFOW(ctypes.Structure):
        _fields_ = [
            ("cbSize", wintypes.DWORD),
            ("fMask", ctypes.c_ulong),
            ("hwnd", wintypes.HWND),
            ("lpVerb", wintypes.LPCWSTR),
            ("lpFile", wintypes.LPCWSTR),
            ("lpParameters", wintypes.LPCWSTR),
            ("lpDirectory", wintypes.LPCWSTR),
            ("nShow", ctypes.c_int),
            ("hInstApp", wintypes.HINSTANCE),
            ("lpIDList", ctypes.c_void_p),
            ("lpClass", wintypes.LPCWSTR),
            ("hkeyClass", wintypes.HKEY),
            ("dwHotKey", wintypes.DWORD),
            ("hIconOrMonitor", wintypes.HANDLE),
            ("hProcess", wintypes.HANDLE),
        ]


class ElevationError(Exception):
    """Relaunching with administrator privileges failed"""

    pass


class ToolExecutionError(Exception):
    """An external tool could not be started"""

    pass


class SystemInfo:
    """System information and utilities"""

    def __init__(self):
        self.os_type = platform.system()
        self.os_release = platform.release()
        self.architecture = platform.architecture()[0]
        self._windows_version = None

    def is_windows(self) -> bool:
        return self.os_type == "Windows"

    def get_windows_version(self) -> Optional[Tuple[int, int, int]]:
        """Get Windows (major, minor, build)"""
        if not self.is_windows():
            return None

        if self._windows_version is None:
            info = sys.getwindowsversion()
            self._windows_version = (info.major, info.minor, info.build)

        return self._windows_version

    def is_supported_system(self) -> bool:
        """Check if the system is Windows NT 6.0 (Vista) or newer"""
        version = self.get_windows_version()
        if version is None:
            return False
        return version[0] >= MIN_WINDOWS_MAJOR

    def get_system_summary(self) -> str:
        """Get human-readable system summary"""
        if self.is_windows():
            major, minor, build = self.get_windows_version()
            return f"Windows {self.os_release} ({self.architecture}) NT {major}.{minor} Build {build}"
        return f"{self.os_type} {self.os_release} ({self.architecture})"


class PrivilegeManager:
    """Handle privilege checking and elevation"""

    @staticmethod
    def is_admin() -> bool:
        """Check if running with administrator/root privileges"""
        try:
            if platform.system() == "Windows":
                return ctypes.windll.shell32.IsUserAnAdmin() != 0
            else:
                return os.geteuid() == 0
        except (AttributeError, OSError):
            return False

    @staticmethod
    def get_relaunch_command(
        silent: bool, overrides: Optional[List[str]] = None
    ) -> Tuple[str, str]:
        """
        Build the executable and parameters for relaunching this program.

        The silent flag and the given override options are forwarded. The
        original command line is not, and neither is the environment: the
        elevated instance starts with the user's default environment.
        """
        executable = sys.executable
        args: List[str] = []

        if not getattr(sys, "frozen", False):
            # Running from source, so restart the interpreter on our module
            args.extend(["-m", "src.main"])

        if silent:
            args.append("/silent")

        if overrides:
            args.extend(overrides)

        return executable, subprocess.list2cmdline(args)

    @staticmethod
    def request_admin_elevation(silent: bool, overrides: Optional[List[str]] = None) -> None:
        """
        Start a new elevated instance of this program via the UAC prompt.

        Does not wait for the new instance. Raises ElevationError when the
        user declines the prompt or the relaunch fails.
        """
        if platform.system() != "Windows":
            raise ElevationError("Elevation is only supported on Windows")

        executable, params = PrivilegeManager.get_relaunch_command(silent, overrides)
        logger.info("Relaunching elevated: %s %s", executable, params)

        ret = ctypes.windll.shell32.ShellExecuteW(
            None,
            "runas",
            executable,
            params,
            str(APP_DIR),
            WINDOWS_SETTINGS["show_window"],
        )

        # If ShellExecuteW returns > 32, it succeeded
        if ret <= 32:
            raise ElevationError(f"ShellExecuteW failed with code {ret}")


class ProcessManager:
    """Process and command execution utilities"""

    @staticmethod
    def run_elevated(tool: str, params: str, timeout: Optional[float] = None) -> int:
        """
        Run a tool with the runas verb and a hidden window, wait until it exits.

        Returns the exit code of the tool. A tool that outlives the timeout is
        terminated and reported with WAIT_TIMEOUT as its exit code.
        """
        logger.info("CMD %s %s", tool, params)

        if platform.system() == "Windows":
            exit_code = ProcessManager._shell_execute_and_wait(tool, params, timeout)
        else:
            exit_code = ProcessManager._run_and_wait(tool, params, timeout)

        logger.info("%s exited with code %d", tool, exit_code)
        return exit_code

    @staticmethod
    def _shell_execute_and_wait(tool: str, params: str, timeout: Optional[float]) -> int:
        shell32 = ctypes.windll.shell32
        kernel32 = ctypes.windll.kernel32
        kernel32.WaitForSingleObject.argtypes = [wintypes.HANDLE, wintypes.DWORD]
        kernel32.WaitForSingleObject.restype = wintypes.DWORD
        kernel32.GetExitCodeProcess.argtypes = [wintypes.HANDLE, ctypes.POINTER(wintypes.DWORD)]
        kernel32.GetExitCodeProcess.restype = wintypes.BOOL
        kernel32.TerminateProcess.argtypes = [wintypes.HANDLE, wintypes.UINT]
        kernel32.CloseHandle.argtypes = [wintypes.HANDLE]

        info = SHELLEXECUTEINFOW()
        info.cbSize = ctypes.sizeof(info)
        info.fMask = SEE_MASK_NOCLOSEPROCESS | SEE_MASK_NOASYNC
        info.lpVerb = "runas"
        info.lpFile = tool
        info.lpParameters = params
        info.nShow = WINDOWS_SETTINGS["show_window"]

        if not shell32.ShellExecuteExW(ctypes.byref(info)):
            raise ToolExecutionError(f"Cannot start {tool}: {ctypes.FormatError()}")

        if not info.hProcess:
            raise ToolExecutionError(f"Cannot start {tool}: no process handle")

        try:
            wait_ms = INFINITE if timeout is None else int(timeout * 1000)
            if kernel32.WaitForSingleObject(info.hProcess, wait_ms) == WAIT_TIMEOUT:
                logger.warning("%s did not finish in %s seconds, terminating", tool, timeout)
                kernel32.TerminateProcess(info.hProcess, WAIT_TIMEOUT)
                return WAIT_TIMEOUT

            exit_code = wintypes.DWORD()
            if not kernel32.GetExitCodeProcess(info.hProcess, ctypes.byref(exit_code)):
                raise ToolExecutionError(f"Cannot read exit code of {tool}: {ctypes.FormatError()}")
            return exit_code.value
        finally:
            kernel32.CloseHandle(info.hProcess)

    @staticmethod
    def _run_and_wait(tool: str, params: str, timeout: Optional[float]) -> int:
        try:
            result = subprocess.run(
                [tool] + shlex.split(params),
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("%s did not finish in %s seconds, terminated", tool, timeout)
            return WAIT_TIMEOUT
        except OSError as e:
            raise ToolExecutionError(f"Cannot start {tool}: {e}") from e

        if result.stdout:
            logger.debug("STDOUT %s", result.stdout.strip())
        if result.stderr:
            logger.debug("STDERR %s", result.stderr.strip())
        return result.returncode

    @staticmethod
    def is_command_available(command: str) -> bool:
        """Check if a command is available in PATH"""
        try:
            subprocess.run(
                ["which" if platform.system() != "Windows" else "where", command],
                capture_output=True,
                check=True,
            )
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False

    @staticmethod
    def get_available_tools(tools: List[str]) -> Dict[str, bool]:
        """Check availability of the external configuration tools"""
        return {tool: ProcessManager.is_command_available(tool) for tool in tools}


class PathManager:
    """Path and file system utilities"""

    @staticmethod
    def get_log_dir() -> Path:
        """Get the log directory, falling back to the per-user config dir"""
        try:
            LOGS_DIR.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Cannot create %s: %s", LOGS_DIR, e)
            return PathManager.get_config_dir()

        if os.access(LOGS_DIR, os.W_OK):
            return LOGS_DIR
        return PathManager.get_config_dir()

    @staticmethod
    def get_config_dir() -> Path:
        """Get user configuration directory"""
        if platform.system() == "Windows":
            path = Path(os.environ.get("APPDATA", "")) / APP_NAME
        else:
            path = Path.home() / ".config" / APP_NAME.lower()
        path.mkdir(parents=True, exist_ok=True)
        return path


# Global system info instance
system_info = SystemInfo()
privilege_manager = PrivilegeManager()
process_manager = ProcessManager()
path_manager = PathManager()


# Convenience functions
def is_admin() -> bool:
    return privilege_manager.is_admin()


def is_supported_system() -> bool:
    return system_info.is_supported_system()


def request_admin_elevation(silent: bool, overrides: Optional[List[str]] = None) -> None:
    privilege_manager.request_admin_elevation(silent, overrides)


def run_elevated(tool: str, params: str, timeout: Optional[float] = None) -> int:
    return process_manager.run_elevated(tool, params, timeout)
