"""Tests for the yt-dlp runner."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from bippi.exceptions import DownloadError, ToolMissingError
from bippi.models.domain import DownloadJob
from bippi.services.discovery import PlaylistDiscoveryService
from bippi.services.runner import YTDLPRunner


@pytest.fixture
def track_job() -> DownloadJob:
    """Create a per-track job with metadata tags."""
    return DownloadJob(
        search_or_url='ytsearch1:Metallica Battery audio -"music video"',
        output_template="/music/01 - Battery.%(ext)s",
        audio_format="mp3",
        metadata_tags=(("artist", "Metallica"), ("track", "01/8")),
    )


@pytest.fixture
def playlist_job() -> DownloadJob:
    """Create a playlist job that maps playlist metadata."""
    return DownloadJob(
        search_or_url="https://www.youtube.com/playlist?list=PL123",
        output_template="/music/%(title)s.%(ext)s",
        audio_format="m4a",
        is_playlist=True,
        parse_playlist_metadata=True,
    )


def completed(
    returncode: int = 0, stdout: bytes = b"", stderr: bytes = b""
) -> MagicMock:
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestBuildCommand:
    """Tests for YTDLPRunner.build_command."""

    def test_track_job(self, track_job: DownloadJob) -> None:
        """Should build a single-video extraction with tag arguments."""
        assert YTDLPRunner().build_command(track_job) == [
            "yt-dlp",
            "--ignore-errors",
            "--continue",
            "-x",
            "--audio-format",
            "mp3",
            "--output",
            "/music/01 - Battery.%(ext)s",
            "--embed-metadata",
            "--no-playlist",
            "--postprocessor-args",
            'ffmpeg:-metadata artist="Metallica" -metadata track="01/8"',
            'ytsearch1:Metallica Battery audio -"music video"',
        ]

    def test_playlist_job(self, playlist_job: DownloadJob) -> None:
        """Should enable playlists and map playlist metadata."""
        assert YTDLPRunner().build_command(playlist_job) == [
            "yt-dlp",
            "--ignore-errors",
            "--continue",
            "-x",
            "--audio-format",
            "m4a",
            "--output",
            "/music/%(title)s.%(ext)s",
            "--embed-metadata",
            "--yes-playlist",
            "--parse-metadata",
            "%(playlist_title|)s:%(meta_album)s",
            "--parse-metadata",
            "%(playlist_index)02d:%(meta_track_number)s",
            "https://www.youtube.com/playlist?list=PL123",
        ]

    def test_target_is_last(self, track_job: DownloadJob) -> None:
        """Should pass the target as the final argument."""
        cmd = YTDLPRunner("/opt/bin/yt-dlp").build_command(track_job)
        assert cmd[0] == "/opt/bin/yt-dlp"
        assert cmd[-1] == track_job.search_or_url


class TestRun:
    """Tests for YTDLPRunner.run."""

    def test_success(self, track_job: DownloadJob) -> None:
        """Should run yt-dlp without capturing its output."""
        runner = YTDLPRunner()
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.return_value = completed()
            runner.run(track_job)

        mock_run.assert_called_once_with(
            runner.build_command(track_job),
            stdin=subprocess.DEVNULL,
            capture_output=False,
            check=False,
        )

    def test_non_zero_exit(self, track_job: DownloadJob) -> None:
        """Should raise with the exit status."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=2)
            with pytest.raises(DownloadError) as exc_info:
                YTDLPRunner().run(track_job)

        assert exc_info.value.returncode == 2
        assert exc_info.value.message == "yt-dlp exited with status 2"

    def test_missing_binary(self, track_job: DownloadJob) -> None:
        """Should report a missing yt-dlp binary."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("yt-dlp")
            with pytest.raises(ToolMissingError, match="not found in PATH"):
                YTDLPRunner().run(track_job)

    def test_cannot_start(self, track_job: DownloadJob) -> None:
        """Should turn other OS errors into download errors."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.side_effect = PermissionError("denied")
            with pytest.raises(DownloadError) as exc_info:
                YTDLPRunner().run(track_job)

        assert exc_info.value.returncode is None


class TestFlatSearch:
    """Tests for YTDLPRunner.flat_search."""

    def test_returns_stdout(self) -> None:
        """Should capture and return the JSON listing."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.return_value = completed(stdout=b'{"entries": []}')
            output = YTDLPRunner().flat_search("ytsearch10:foo album")

        assert output == b'{"entries": []}'
        mock_run.assert_called_once_with(
            ["yt-dlp", "--flat-playlist", "-J", "ytsearch10:foo album"],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=False,
        )

    def test_failure_returns_none(self) -> None:
        """Should return None when yt-dlp fails."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=1, stderr=b"ERROR: boom")
            assert YTDLPRunner().flat_search("ytsearch10:foo album") is None

    def test_missing_binary(self) -> None:
        """Should report a missing yt-dlp binary instead of returning None."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("yt-dlp")
            with pytest.raises(ToolMissingError):
                YTDLPRunner().flat_search("ytsearch10:foo album")

    def test_undecodable_stderr(self) -> None:
        """Should log undecodable stderr and still return None."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=1, stderr=b"\xff\xfe")
            assert YTDLPRunner().flat_search("ytsearch10:foo album") is None

    @pytest.mark.parametrize(
        ("returncode", "stdout", "stderr"),
        [(1, b"", b"\xff\xfe"), (0, b"\xff{}", b"")],
        ids=["bad_stderr", "bad_stdout"],
    )
    def test_undecodable_output_is_not_found(
        self, returncode: int, stdout: bytes, stderr: bytes
    ) -> None:
        """Discovery over a runner with undecodable output finds nothing."""
        with patch("bippi.services.runner.subprocess.run") as mock_run:
            mock_run.return_value = completed(
                returncode=returncode, stdout=stdout, stderr=stderr
            )
            result = PlaylistDiscoveryService(YTDLPRunner()).find_playlist("q")

        assert not result.is_found
