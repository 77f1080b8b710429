"""Unit tests for hlaunch.launch.process."""

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from hlaunch.errors import LaunchError
from hlaunch.launch.process import ProcessFactory, build_command
from hlaunch.models import LaunchAccount, LaunchRequest, Version

STEVE_ID = "8667ba71-b85a-4004-af54-457a9734eed7"


def make_request(tmp_path, xuid="", **kwargs):
    version = Version.model_validate(
        {
            "id": "1.20.4",
            "mainClass": "net.minecraft.client.main.Main",
            "assetIndex": {"id": "12"},
            "libraries": [{"downloads": {"artifact": {"path": "a/b.jar"}}}],
        }
    )
    account = LaunchAccount(
        kind="msa", name="Steve", id=STEVE_ID, access_token="secret", xuid=xuid
    )
    return LaunchRequest(
        account=account, version=version, game_dir=tmp_path, java="java", **kwargs
    )


class TestBuildCommand:
    def test_layout(self, tmp_path):
        request = make_request(tmp_path, jvm_args=["-Xmx2G"])

        command = build_command(request)

        classpath = os.pathsep.join(
            [
                str(tmp_path / "libraries" / "a/b.jar"),
                str(tmp_path / "versions" / "1.20.4" / "1.20.4.jar"),
            ]
        )
        assert command[:5] == [
            "java", "-Xmx2G", "-cp", classpath, "net.minecraft.client.main.Main"
        ]

    def test_account_arguments(self, tmp_path):
        command = build_command(make_request(tmp_path))

        def value(flag):
            return command[command.index(flag) + 1]

        assert value("--username") == "Steve"
        assert value("--uuid") == STEVE_ID
        assert value("--accessToken") == "secret"
        assert value("--userType") == "msa"
        assert value("--assetIndex") == "12"
        assert "--xuid" not in command

    def test_xuid_is_passed_when_known(self, tmp_path):
        command = build_command(make_request(tmp_path, xuid="2535"))
        assert command[command.index("--xuid") + 1] == "2535"


class TestProcessFactory:
    @patch("hlaunch.launch.process.subprocess.Popen")
    @patch("hlaunch.launch.process.shutil.which", return_value="/usr/bin/java")
    def test_starts_process_in_game_dir(self, _which, mock_popen, tmp_path):
        process = MagicMock()
        mock_popen.return_value = process

        assert ProcessFactory().run(make_request(tmp_path)) is process

        args, kwargs = mock_popen.call_args
        assert args[0][0] == "/usr/bin/java"
        assert kwargs["cwd"] == tmp_path
        assert kwargs["stdout"] is None

    @patch("hlaunch.launch.process.subprocess.Popen")
    @patch("hlaunch.launch.process.shutil.which", return_value="/usr/bin/java")
    def test_no_output_discards_streams(self, _which, mock_popen, tmp_path):
        ProcessFactory().run(make_request(tmp_path, no_output=True))

        kwargs = mock_popen.call_args[1]
        assert kwargs["stdout"] is subprocess.DEVNULL
        assert kwargs["stderr"] is subprocess.DEVNULL

    @patch("hlaunch.launch.process.shutil.which", return_value=None)
    def test_missing_java(self, _which, tmp_path):
        with pytest.raises(LaunchError, match="Java executable 'java' not found"):
            ProcessFactory().run(make_request(tmp_path))

    @patch("hlaunch.launch.process.subprocess.Popen", side_effect=PermissionError("denied"))
    @patch("hlaunch.launch.process.shutil.which", return_value="/usr/bin/java")
    def test_spawn_failure(self, _which, _popen, tmp_path):
        with pytest.raises(LaunchError, match="Failed to start game process: denied"):
            ProcessFactory().run(make_request(tmp_path))

    @patch("hlaunch.launch.process.subprocess.Popen")
    @patch("hlaunch.launch.process.shutil.which", return_value="/usr/bin/java")
    def test_debug_log_redacts_token(self, _which, _popen, tmp_path, caplog):
        caplog.set_level("DEBUG", logger="hlaunch.launch.process")

        ProcessFactory().run(make_request(tmp_path))

        assert "secret" not in caplog.text
        assert "***" in caplog.text
