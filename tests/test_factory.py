"""Tests for factory functions and public API."""

from pathlib import Path

from bippi import (
    AliasEntry,
    DownloadConfig,
    DownloadMode,
    DownloadOrchestrator,
    create_orchestrator,
)


class TestCreateOrchestrator:
    """Tests for create_orchestrator factory function."""

    def test_creates_orchestrator_with_defaults(self, tmp_path: Path) -> None:
        """Should create orchestrator with an empty alias table."""
        orchestrator = create_orchestrator(DownloadConfig(destination=tmp_path))

        assert isinstance(orchestrator, DownloadOrchestrator)
        target = orchestrator.resolve("focus", DownloadMode.SINGLE)
        assert target.value != "https://example/list?list=X"

    def test_creates_orchestrator_with_aliases(self, tmp_path: Path) -> None:
        """Should create orchestrator that resolves the given aliases."""
        aliases = {"focus": AliasEntry(url="https://example/list?list=X", album=True)}
        notices: list[str] = []
        orchestrator = create_orchestrator(
            DownloadConfig(destination=tmp_path), aliases, notify=notices.append
        )

        assert isinstance(orchestrator, DownloadOrchestrator)
        target = orchestrator.resolve("focus", DownloadMode.SINGLE)
        assert target.value == "https://example/list?list=X"
        assert target.is_album is True


class TestPublicAPI:
    """Tests for public API exports."""

    def test_all_expected_exports_available(self) -> None:
        """All documented exports should be available."""
        import bippi

        # Factory functions
        assert hasattr(bippi, "create_orchestrator")

        # Services
        assert hasattr(bippi, "DownloadOrchestrator")
        assert hasattr(bippi, "MusicBrainzClient")
        assert hasattr(bippi, "PlaylistDiscoveryService")
        assert hasattr(bippi, "YTDLPRunner")

        # Models
        assert hasattr(bippi, "Album")
        assert hasattr(bippi, "Track")
        assert hasattr(bippi, "DownloadJob")
        assert hasattr(bippi, "DownloadMode")
        assert hasattr(bippi, "LookupResult")
        assert hasattr(bippi, "LookupStatus")
        assert hasattr(bippi, "ResolvedTarget")
        assert hasattr(bippi, "TargetKind")

        # Config
        assert hasattr(bippi, "AppConfig")
        assert hasattr(bippi, "AliasEntry")
        assert hasattr(bippi, "DownloadConfig")

        # Exceptions
        assert hasattr(bippi, "BippiError")
        assert hasattr(bippi, "AliasNotFoundError")
        assert hasattr(bippi, "ConfigError")
        assert hasattr(bippi, "DownloadError")
        assert hasattr(bippi, "EmptyReleaseError")
        assert hasattr(bippi, "MetadataServiceError")
        assert hasattr(bippi, "ToolMissingError")
