#!/usr/bin/env python3
"""
EduConfig - Main Application Entry Point
Lublin University of Technology

Entry point for the application. Resolves the command line, makes sure we run
as administrator, asks the user to confirm and installs the root CA
certificate and the eduroam profile.

The exit code is a combination of ExitCode flags so deployment scripts can
tell which step failed.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from src.config import (
    APP_NAME,
    CA_CERT_OVERRIDE,
    CERT_TOOL,
    COPYRIGHT,
    DEBUG_MODE,
    ERROR_MESSAGES,
    HELP_TEXT,
    PROFILE_XML_PATH,
    STATUS_MESSAGES,
    SUCCESS_MESSAGES,
    TOOL_TIMEOUT,
    VERSION,
    WLAN_TOOL,
    ExitCode,
    parse_timeout,
)
from src.network import EduroamInstaller, load_profile
from src.ui import UserInterface
from src.utils import (
    AssetError,
    ElevationError,
    is_admin,
    is_supported_system,
    load_ca_certificate,
    process_manager,
    request_admin_elevation,
    setup_logging,
    system_info,
)

logger = logging.getLogger(__name__)

# Short and Windows-style spellings of the canonical flags
FLAG_ALIASES = {
    "/s": "/silent",
    "/?": "--help",
    "-h": "--help",
    "/help": "--help",
    "/v": "--version",
    "/version": "--version",
    "/check": "--check",
    "/debug": "--debug",
    "/cert": "--cert",
    "/profile": "--profile",
    "/timeout": "--timeout",
}

# Options taking a value, either as the next argument or after '='
VALUE_OPTIONS = ("--cert", "--profile", "--timeout")


@dataclass(frozen=True)
class InvocationOptions:
    """What the user asked for on the command line"""

    silent: bool = False
    help_requested: bool = False
    version_requested: bool = False
    check_requested: bool = False
    debug: bool = False
    cert_path: Optional[str] = None
    profile_path: Optional[str] = None
    timeout: Optional[float] = None


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="eduroam wireless network configuration",
        prefix_chars="-/",
        add_help=False,
        allow_abbrev=False,
    )

    parser.add_argument("/silent", dest="silent", action="store_true")
    parser.add_argument("--help", dest="help", action="store_true")
    parser.add_argument("--version", dest="version", action="store_true")
    parser.add_argument("--check", dest="check", action="store_true")
    parser.add_argument("--debug", dest="debug", action="store_true")
    parser.add_argument("--cert", dest="cert")
    parser.add_argument("--profile", dest="profile")
    parser.add_argument("--timeout", dest="timeout")

    return parser


def normalize_arguments(argv: List[str]) -> Tuple[List[str], List[str]]:
    """
    Expand aliases and split arguments into recognized options and the rest

    Flag names are case-insensitive, as usual for Windows programs; option
    values keep their case. Values are always returned attached with '=' so
    a path starting with '/' is not mistaken for a flag.

    Returns:
        tuple: (canonical_options, ignored_arguments)
    """
    canonical = set(FLAG_ALIASES.values())
    recognized: List[str] = []
    ignored: List[str] = []

    remaining = iter(argv)
    for arg in remaining:
        name, sep, value = arg.partition("=")
        option = FLAG_ALIASES.get(name.lower(), name.lower())
        if option in VALUE_OPTIONS:
            if not sep:
                value = next(remaining, None)
                if value is None:
                    ignored.append(arg)
                    continue
            recognized.append(f"{option}={value}")
            continue

        flag = FLAG_ALIASES.get(arg.lower(), arg.lower())
        if flag in canonical and flag not in VALUE_OPTIONS:
            recognized.append(flag)
        else:
            ignored.append(arg)

    return recognized, ignored


def parse_arguments(argv: List[str]) -> InvocationOptions:
    """Build InvocationOptions from the raw argument list, ignoring unknown arguments"""
    recognized, ignored = normalize_arguments(argv)
    args = create_argument_parser().parse_args(recognized)

    if ignored:
        logger.debug("Ignoring unrecognized arguments: %s", ignored)

    return InvocationOptions(
        silent=args.silent,
        help_requested=args.help,
        version_requested=args.version,
        check_requested=args.check,
        debug=args.debug,
        cert_path=args.cert or None,
        profile_path=args.profile or None,
        timeout=parse_timeout(args.timeout),
    )


def apply_environment(options: InvocationOptions) -> InvocationOptions:
    """Fill options not given on the command line from EDUCONFIG_* variables"""
    return replace(
        options,
        debug=options.debug or DEBUG_MODE,
        cert_path=options.cert_path or CA_CERT_OVERRIDE,
        profile_path=options.profile_path or PROFILE_XML_PATH,
        timeout=options.timeout if options.timeout is not None else TOOL_TIMEOUT,
    )


def relaunch_arguments(options: InvocationOptions) -> List[str]:
    """
    Options the elevated instance needs to repeat this run

    The elevated instance gets neither this environment nor this working
    directory, so overrides are passed explicitly with absolute paths.
    """
    args: List[str] = []
    if options.debug:
        args.append("--debug")
    if options.cert_path:
        args.append(f"--cert={os.path.abspath(options.cert_path)}")
    if options.profile_path:
        args.append(f"--profile={os.path.abspath(options.profile_path)}")
    if options.timeout is not None:
        args.append(f"--timeout={options.timeout:g}")
    return args


def show_version():
    """Print name, version and copyright"""
    print(f"{APP_NAME} {VERSION}")
    print(COPYRIGHT)


def show_help():
    """Print version information and usage"""
    show_version()
    print()
    print(HELP_TEXT)


def handle_check_mode(options: InvocationOptions) -> ExitCode:
    """Handle system readiness check mode"""
    print(f"Checking system readiness for {APP_NAME} {VERSION}...")
    print()

    supported = is_supported_system()
    print(f"System: {system_info.get_system_summary()}")
    print(f"Supported: {'Yes' if supported else 'No'}")
    print(f"Privileges: {'Administrator' if is_admin() else 'Standard User'}")
    print()

    print("External tools:")
    tools = process_manager.get_available_tools([CERT_TOOL, WLAN_TOOL])
    for tool, available in tools.items():
        print(f"   {tool}: {'OK' if available else 'MISSING'}")
    print()

    try:
        load_ca_certificate(options.cert_path)
        assets_ok = True
        print("CA certificate: OK")
    except AssetError as e:
        assets_ok = False
        print(f"CA certificate: {e}")

    if options.profile_path:
        try:
            load_profile(options.profile_path)
            print("WLAN profile: OK")
        except AssetError as e:
            assets_ok = False
            print(f"WLAN profile: {e}")
    print()

    if supported and assets_ok and all(tools.values()):
        print(f"System is ready to run {APP_NAME}!")
        return ExitCode.NoError

    print("System is not ready. Please fix the issues above.")
    return ExitCode.SystemNotSupported


def run_installation(options: InvocationOptions, ui: UserInterface) -> ExitCode:
    """Elevate, check the platform, confirm and install"""
    if not is_admin():
        logger.info(STATUS_MESSAGES["need_admin"])
        try:
            request_admin_elevation(options.silent, relaunch_arguments(options))
        except ElevationError as e:
            logger.warning("Elevation failed: %s", e)
            ui.show_error(ERROR_MESSAGES["need_admin"])
            return ExitCode.NoAdmin

        # The elevated instance does the work, this one is done
        return ExitCode.NoError

    # Silent runs never stop on the platform question
    if not options.silent and not is_supported_system():
        logger.warning("Unsupported system: %s", system_info.get_system_summary())
        if not ui.ask_yes_no(ERROR_MESSAGES["system_not_supported"]):
            return ExitCode.SystemNotSupported

    if options.silent or ui.ask_yes_no(SUCCESS_MESSAGES["info"]):
        installer = EduroamInstaller(
            ui,
            timeout=options.timeout,
            cert_path=options.cert_path,
            profile_path=options.profile_path,
        )
        return installer.install()

    logger.info("Installation cancelled by user")
    return ExitCode.NoError


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point"""
    if argv is None:
        argv = sys.argv[1:]

    silent = False
    ui = None

    try:
        options = parse_arguments(argv)
        silent = options.silent

        if options.version_requested:
            show_version()
            return int(ExitCode.NoError)

        if options.help_requested:
            show_help()
            return int(ExitCode.NoError)

        options = apply_environment(options)
        setup_logging(options.debug)
        logger.info("%s %s started, silent=%s", APP_NAME, VERSION, silent)

        if options.check_requested:
            return int(handle_check_mode(options))

        ui = UserInterface(silent)
        exit_code = run_installation(options, ui)

    except Exception as e:
        logger.exception("Unhandled exception")
        exit_code = ExitCode.UnhandledException
        message = f"{ERROR_MESSAGES['unhandled_exception']} {e}"
        try:
            if ui is None:
                ui = UserInterface(silent)
            ui.show_error(message)
        except Exception:
            # No way to show a dialog, e.g. no display
            logger.exception("Cannot show the error dialog")
            print(message, file=sys.stderr)

    finally:
        if ui is not None:
            ui.close()

    logger.info("Exiting with code %d", exit_code)
    return int(exit_code)


if __name__ == "__main__":
    sys.exit(main())
