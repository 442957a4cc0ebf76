#!/usr/bin/env python3
"""
EduConfig - Exit Codes
Lublin University of Technology

Process exit codes as a set of flags. Failures of independent steps are
combined with bitwise OR, so a script can test which step failed.
"""

from enum import IntFlag


class ExitCode(IntFlag):
    """Possible program exit codes"""

    NoError = 0
    CertInstallError = 1
    ProfileInstallError = 2
    SystemNotSupported = 4
    NoAdmin = 8
    UnhandledException = 16


__all__ = ["ExitCode"]
