"""Test fixtures and configuration."""

from pathlib import Path
from typing import Any

import pytest
from bippi.config import DownloadConfig
from bippi.exceptions import DownloadError
from bippi.models.domain import Album, DownloadJob, Track


class RecordingRunner:
    """Runner that records jobs instead of spawning yt-dlp."""

    def __init__(self) -> None:
        self.jobs: list[DownloadJob] = []
        self.searches: list[str] = []
        self.listing: bytes | None = None
        self.fail_on: int | None = None

    def run(self, job: DownloadJob) -> None:
        self.jobs.append(job)
        if self.fail_on is not None and len(self.jobs) == self.fail_on:
            raise DownloadError.from_returncode(1)

    def flat_search(self, search_term: str) -> bytes | None:
        self.searches.append(search_term)
        return self.listing


@pytest.fixture
def runner() -> RecordingRunner:
    """Create a runner that records every job."""
    return RecordingRunner()


@pytest.fixture
def download_config(tmp_path: Path) -> DownloadConfig:
    """Create a download config writing into a temporary directory."""
    return DownloadConfig(destination=tmp_path / "music")


@pytest.fixture
def single_disc_album() -> Album:
    """Create a three-track single-disc album."""
    return Album(
        title="Master of Puppets",
        artist="Metallica",
        release_date="1986-03-03",
        total_discs=1,
        tracks=(
            Track(title="Battery", disc=1, position=1, overall_index=1),
            Track(title="Master of Puppets", disc=1, position=2, overall_index=2),
            Track(title="The Thing That Should Not Be", disc=1, position=3, overall_index=3),
        ),
    )


@pytest.fixture
def multi_disc_album() -> Album:
    """Create a two-disc album without a release date."""
    return Album(
        title="Mellon Collie and the Infinite Sadness",
        artist="The Smashing Pumpkins",
        total_discs=2,
        tracks=(
            Track(title="Mellon Collie", disc=1, position=1, overall_index=1),
            Track(title="Tonight, Tonight", disc=1, position=2, overall_index=2),
            Track(title="Where Boys Fear to Tread", disc=2, position=1, overall_index=3),
            Track(title="Bodies", disc=2, position=2, overall_index=4),
        ),
    )


@pytest.fixture
def release_payload() -> dict[str, Any]:
    """Create a MusicBrainz release detail payload with two media."""
    return {
        "id": "release-1",
        "title": "Mellon Collie and the Infinite Sadness",
        "date": "1995-10-23",
        "artist-credit": [
            {"name": "The Smashing Pumpkins", "artist": {"name": "The Smashing Pumpkins"}}
        ],
        "media": [
            {
                "position": 1,
                "tracks": [
                    {"position": 1, "number": "1", "title": "Mellon Collie"},
                    {"position": 2, "number": "2", "title": "Tonight, Tonight"},
                ],
            },
            {
                "position": 2,
                "tracks": [
                    {"position": 1, "number": "1", "title": "Where Boys Fear to Tread"},
                    {"position": 2, "number": "2", "title": "Bodies"},
                    {"position": 3, "number": "3", "title": "Thirty-Three"},
                ],
            },
        ],
    }
