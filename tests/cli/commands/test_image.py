import pytest
from unittest.mock import MagicMock, Mock, call, patch

from spoon.cli.commands.image import build_image, list_images, run_pre_build_commands
from spoon.models.options import SpoonOptions
from spoon.services.exceptions import DockerServiceError


class TestListImages:
    """Tests for listing images."""

    @patch('spoon.cli.commands.image.get_docker_service')
    def test_list_images(self, mock_get_service, options, capsys):
        image = Mock()
        image.short_id = "sha256:0a1b2c3d4e"
        image.attrs = {"RepoTags": ["spoon-pairing:latest"]}
        mock_get_service.return_value.list_images.return_value = [image]

        list_images(options)

        out = capsys.readouterr().out
        assert "spoon-pairing:latest" in out
        mock_get_service.assert_called_once_with("tcp://docker.example.com:2375")

    @patch('spoon.cli.commands.image.get_docker_service')
    def test_list_images_empty(self, mock_get_service, options, capsys):
        mock_get_service.return_value.list_images.return_value = []

        list_images(options)

        assert "No images found" in capsys.readouterr().out


class TestBuildImage:
    """Tests for building the pairing image."""

    @patch('spoon.cli.commands.image.subprocess.run')
    @patch('spoon.cli.commands.image.get_docker_service')
    def test_build(self, mock_get_service, mock_run, capsys):
        options = SpoonOptions(
            image="team-pairing",
            builddir="/srv/pairing",
            pre_build_commands=["make keys", "make dotfiles"],
        )
        mock_run.return_value = MagicMock(returncode=0)
        service = mock_get_service.return_value
        service.build_image.return_value = iter([
            {"stream": "Step 1/2 : FROM ubuntu\n"},
            {"status": "Pulling"},
        ])

        build_image(options)

        assert mock_run.call_args_list == [
            call("make keys", shell=True),
            call("make dotfiles", shell=True),
        ]
        service.build_image.assert_called_once_with(path="/srv/pairing", tag="team-pairing")
        out = capsys.readouterr().out
        assert "Step 1/2 : FROM ubuntu\n" in out
        assert "status: Pulling" in out
        assert "Image built: team-pairing" in out

    @patch('spoon.cli.commands.image.subprocess.run')
    @patch('spoon.cli.commands.image.get_docker_service')
    def test_failed_pre_build_command_stops_build(self, mock_get_service, mock_run, capsys):
        options = SpoonOptions(pre_build_commands=["false", "make keys"])
        mock_run.return_value = MagicMock(returncode=1)

        with pytest.raises(SystemExit) as exc_info:
            build_image(options)

        assert exc_info.value.code == 1
        mock_run.assert_called_once_with("false", shell=True)
        mock_get_service.assert_not_called()
        assert "pre-build command failed" in capsys.readouterr().err

    @patch('spoon.cli.commands.image.get_docker_service')
    def test_build_error_propagates(self, mock_get_service, options):
        def failing_build(path, tag):
            yield {"stream": "Step 1/2\n"}
            raise DockerServiceError("Failed to build image: boom")

        mock_get_service.return_value.build_image.side_effect = failing_build

        with pytest.raises(DockerServiceError, match="boom"):
            build_image(options)

    @patch('spoon.cli.commands.image.subprocess.run')
    def test_run_pre_build_commands_empty(self, mock_run):
        run_pre_build_commands([])
        mock_run.assert_not_called()
