"""Tests for routemap.app — the build entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from routemap._errors import ConfigurationError
from routemap.app import build
from routemap.config import SitemapConfig
from routemap.generator import generate_sitemaps_sync
from routemap.observability.collector import SitemapCollector
from routemap.observability.events import EntriesMerged, SitemapWritten


class TestBuild:
    """build — load, generate, write, summarize."""

    def test_writes_sitemap(self, project: Path) -> None:
        written = build(project)

        assert [f.name for f in written] == ["sitemap"]
        xml = (project / "dist" / "sitemap.xml").read_text(encoding="utf-8")
        assert "<loc>https://example.com/</loc>" in xml
        assert "<loc>https://example.com/article/hello</loc>" in xml
        assert "<loc>https://example.com/article/world</loc>" in xml
        assert "<loc>https://example.com/about</loc>" in xml
        assert "<priority>0.3</priority>" in xml
        assert xml.count("<changefreq>weekly</changefreq>") == 5

    def test_overrides(self, project: Path, tmp_path: Path) -> None:
        output = tmp_path / "public"
        build(project, output=str(output), base_url="https://other.net", trailing_slash=True)

        xml = (output / "sitemap.xml").read_text(encoding="utf-8")
        assert "<loc>https://other.net/about/</loc>" in xml
        assert not (project / "dist").exists()

    def test_collector_receives_events(self, project: Path) -> None:
        collector = SitemapCollector()
        build(project, collector=collector)

        [merged] = collector.log.query(event_type=EntriesMerged)
        assert merged.total == 5
        assert len(collector.log.query(event_type=SitemapWritten)) == 1

    def test_summary_on_stderr(
        self, project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        build(project)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Wrote 1 document (5 URLs)" in captured.err
        assert "sitemap.xml" in captured.err
        assert "bytes  (rendered in " in captured.err
        assert "\033[" not in captured.err

    def test_invalid_config_raises(self, tmp_path: Path) -> None:
        (tmp_path / "routemap.yaml").write_text("urls:\n  - /about\n")
        with pytest.raises(ConfigurationError):
            build(tmp_path)

    def test_summary_lists_every_part(
        self, project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr("routemap.app.generate_sitemaps_sync", _small_parts)
        build(project)

        lines = capsys.readouterr().err.splitlines()
        for name in ("sitemap-part-1.xml", "sitemap-part-2.xml", "sitemap-index.xml"):
            [line] = [line for line in lines if line.strip().startswith(name)]
            assert "rendered in" in line


def _small_parts(config: SitemapConfig, *, collector: SitemapCollector | None = None) -> dict[str, str]:
    return generate_sitemaps_sync(config, collector=collector, max_entries=3)
