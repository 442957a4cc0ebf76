"""System utility tests"""

import ctypes
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

import src.utils.system_utils as system_utils
from src.utils.system_utils import (
    INFINITE,
    WAIT_TIMEOUT,
    ElevationError,
    PathManager,
    PrivilegeManager,
    ProcessManager,
    SystemInfo,
    ToolExecutionError,
)


class TestSystemInfo:
    """Supported platform is Windows NT 6.0 or newer"""

    @pytest.mark.parametrize(
        "os_type, version, expected",
        [
            pytest.param("Windows", (10, 0, 22631), True, id="Windows 11"),
            pytest.param("Windows", (6, 1, 7601), True, id="Windows 7"),
            pytest.param("Windows", (6, 0, 6000), True, id="Windows Vista"),
            pytest.param("Windows", (5, 1, 2600), False, id="Windows XP"),
            pytest.param("Linux", None, False, id="Linux"),
        ],
    )
    def test_is_supported_system(self, os_type: str, version, expected: bool) -> None:
        info = SystemInfo()
        info.os_type = os_type
        info._windows_version = version

        assert info.is_supported_system() is expected

    def test_summary_mentions_build(self) -> None:
        info = SystemInfo()
        info.os_type = "Windows"
        info._windows_version = (10, 0, 19045)

        assert "Build 19045" in info.get_system_summary()


class TestRelaunchCommand:
    """The elevated instance gets the silent flag and explicit overrides only"""

    @pytest.mark.parametrize(
        "silent, expected",
        [
            pytest.param(False, "-m src.main", id="interactive"),
            pytest.param(True, "-m src.main /silent", id="silent"),
        ],
    )
    def test_source_run(self, monkeypatch: pytest.MonkeyPatch, silent: bool, expected: str) -> None:
        monkeypatch.delattr(sys, "frozen", raising=False)
        monkeypatch.setattr(sys, "argv", ["main.py", "/s", "--debug", "extra"])

        executable, params = PrivilegeManager.get_relaunch_command(silent)

        assert executable == sys.executable
        assert params == expected

    def test_overrides_are_forwarded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delattr(sys, "frozen", raising=False)

        _, params = PrivilegeManager.get_relaunch_command(
            True, ["--debug", "--cert=C:\\My Certs\\ca.der", "--timeout=30"]
        )

        assert params == (
            '-m src.main /silent --debug "--cert=C:\\My Certs\\ca.der" --timeout=30'
        )

    def test_frozen_run(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "frozen", True, raising=False)

        assert PrivilegeManager.get_relaunch_command(True)[1] == "/silent"
        assert PrivilegeManager.get_relaunch_command(False)[1] == ""


class TestRequestAdminElevation:
    """Relaunch through ShellExecuteW with the runas verb"""

    @pytest.fixture
    def windll(self, monkeypatch: pytest.MonkeyPatch) -> MagicMock:
        fake = MagicMock()
        monkeypatch.setattr(ctypes, "windll", fake, raising=False)
        monkeypatch.setattr("src.utils.system_utils.platform.system", lambda: "Windows")
        return fake

    def test_success(self, windll: MagicMock) -> None:
        windll.shell32.ShellExecuteW.return_value = 42

        PrivilegeManager.request_admin_elevation(silent=True)

        args = windll.shell32.ShellExecuteW.call_args.args
        assert args[1] == "runas"
        assert args[3].endswith("/silent")
        assert args[5] == 0  # hidden window

    def test_declined(self, windll: MagicMock) -> None:
        # SE_ERR_ACCESSDENIED, returned when the UAC prompt is declined
        windll.shell32.ShellExecuteW.return_value = 5

        with pytest.raises(ElevationError):
            PrivilegeManager.request_admin_elevation(silent=False)

    def test_not_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("src.utils.system_utils.platform.system", lambda: "Linux")

        with pytest.raises(ElevationError):
            PrivilegeManager.request_admin_elevation(silent=False)


class TestRunAndWait:
    """Blocking wait on the external process"""

    @pytest.mark.parametrize(
        "code",
        [pytest.param(0, id="success"), pytest.param(3, id="failure")],
    )
    def test_exit_code(self, code: int) -> None:
        params = f'-c "import sys; sys.exit({code})"'
        assert ProcessManager._run_and_wait(sys.executable, params, timeout=30) == code

    def test_timeout(self) -> None:
        params = '-c "import time; time.sleep(10)"'
        assert ProcessManager._run_and_wait(sys.executable, params, timeout=0.5) == WAIT_TIMEOUT

    def test_missing_tool(self) -> None:
        from src.utils import ToolExecutionError

        with pytest.raises(ToolExecutionError):
            ProcessManager._run_and_wait("educonfig-no-such-tool", "", timeout=5)

    def test_run_elevated_dispatches_off_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("src.utils.system_utils.platform.system", lambda: "Linux")
        params = '-c "import sys; sys.exit(2)"'

        assert ProcessManager.run_elevated(sys.executable, params) == 2


PROCESS_HANDLE = 0x1234


class FakeExecuteInfo(ctypes.Structure):
    """The SHELLEXECUTEINFOW fields the wait path touches"""

    _fields_ = [
        ("cbSize", ctypes.c_uint32),
        ("fMask", ctypes.c_ulong),
        ("lpVerb", ctypes.c_wchar_p),
        ("lpFile", ctypes.c_wchar_p),
        ("lpParameters", ctypes.c_wchar_p),
        ("nShow", ctypes.c_int),
        ("hProcess", ctypes.c_void_p),
    ]


class TestShellExecuteAndWait:
    """ShellExecuteExW, then a blocking WaitForSingleObject on the process handle"""

    @pytest.fixture
    def api(self, monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
        windll = MagicMock()
        monkeypatch.setattr(ctypes, "windll", windll, raising=False)
        monkeypatch.setattr(ctypes, "FormatError", lambda: "Access is denied.", raising=False)
        monkeypatch.setattr(
            system_utils,
            "wintypes",
            SimpleNamespace(
                DWORD=ctypes.c_uint32,
                HANDLE=ctypes.c_void_p,
                BOOL=ctypes.c_int,
                UINT=ctypes.c_uint,
            ),
            raising=False,
        )
        monkeypatch.setattr(system_utils, "SHELLEXECUTEINFOW", FakeExecuteInfo, raising=False)

        state = SimpleNamespace(windll=windll, started=[], exit_code=0)

        def shell_execute(ref):
            info = ref._obj
            state.started.append(info)
            info.hProcess = PROCESS_HANDLE
            return 1

        def get_exit_code(handle, ref):
            ref._obj.value = state.exit_code
            return 1

        windll.shell32.ShellExecuteExW.side_effect = shell_execute
        windll.kernel32.WaitForSingleObject.return_value = 0  # WAIT_OBJECT_0
        windll.kernel32.GetExitCodeProcess.side_effect = get_exit_code
        return state

    @pytest.mark.parametrize(
        "code",
        [pytest.param(0, id="success"), pytest.param(0x80092004, id="certutil error")],
    )
    def test_exit_code(self, api: SimpleNamespace, code: int) -> None:
        api.exit_code = code

        result = ProcessManager._shell_execute_and_wait("certutil", "-addstore Root x.der", None)

        assert result == code
        info = api.started[0]
        assert info.lpVerb == "runas"
        assert info.lpFile == "certutil"
        assert info.lpParameters == "-addstore Root x.der"
        assert info.nShow == 0
        api.windll.kernel32.WaitForSingleObject.assert_called_once_with(PROCESS_HANDLE, INFINITE)
        api.windll.kernel32.TerminateProcess.assert_not_called()
        api.windll.kernel32.CloseHandle.assert_called_once_with(PROCESS_HANDLE)

    def test_timeout_terminates_tool(self, api: SimpleNamespace) -> None:
        kernel32 = api.windll.kernel32
        kernel32.WaitForSingleObject.return_value = WAIT_TIMEOUT

        assert ProcessManager._shell_execute_and_wait("netsh", "wlan", 1.5) == WAIT_TIMEOUT

        kernel32.WaitForSingleObject.assert_called_once_with(PROCESS_HANDLE, 1500)
        kernel32.TerminateProcess.assert_called_once_with(PROCESS_HANDLE, WAIT_TIMEOUT)
        kernel32.GetExitCodeProcess.assert_not_called()
        kernel32.CloseHandle.assert_called_once_with(PROCESS_HANDLE)

    def test_start_failure(self, api: SimpleNamespace) -> None:
        api.windll.shell32.ShellExecuteExW.side_effect = None
        api.windll.shell32.ShellExecuteExW.return_value = 0

        with pytest.raises(ToolExecutionError, match="Access is denied"):
            ProcessManager._shell_execute_and_wait("certutil", "", None)

        api.windll.kernel32.WaitForSingleObject.assert_not_called()

    def test_exit_code_failure_closes_handle(self, api: SimpleNamespace) -> None:
        api.windll.kernel32.GetExitCodeProcess.side_effect = None
        api.windll.kernel32.GetExitCodeProcess.return_value = 0

        with pytest.raises(ToolExecutionError):
            ProcessManager._shell_execute_and_wait("netsh", "wlan", None)

        api.windll.kernel32.CloseHandle.assert_called_once_with(PROCESS_HANDLE)

    def test_run_elevated_dispatches_on_windows(
        self, api: SimpleNamespace, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("src.utils.system_utils.platform.system", lambda: "Windows")
        api.exit_code = 1

        assert ProcessManager.run_elevated("netsh", "wlan add profile") == 1
        api.windll.shell32.ShellExecuteExW.assert_called_once()


class TestPathManager:
    """The log directory is created on first use, not on import"""

    def test_creates_log_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        logs = tmp_path / "EduConfig" / "logs"
        monkeypatch.setattr(system_utils, "LOGS_DIR", logs)

        assert PathManager.get_log_dir() == logs
        assert logs.is_dir()

    def test_falls_back_to_config_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        blocker = tmp_path / "EduConfig"
        blocker.write_text("not a directory")
        monkeypatch.setattr(system_utils, "LOGS_DIR", blocker / "logs")
        monkeypatch.setattr(PathManager, "get_config_dir", staticmethod(lambda: tmp_path))

        assert PathManager.get_log_dir() == tmp_path
