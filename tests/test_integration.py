"""
Integration tests for the marine heatwave application.

Run the full load, merge, detect and export cycle on temporary files.
"""

import json

import pytest
from src.marine_heatwave.main import MarineHeatwaveApp
from src.marine_heatwave.tabular import read_table


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Config, baseline and archive files in a temporary directory."""
    for name in ("ARCHIVE_FILE", "BASELINE_FILE", "PROCESSING_TIMEZONE", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "test.log"))

    baseline_lines = ["day of year,jimbaran_clim,jimbaran_p90,nusadua_clim,nusadua_p90,sanur_clim,sanur_p90"]
    for day in range(1, 366):
        baseline_lines.append(f"{day},28.0,29.0,28.0,29.0,27.5,28.5")
    (tmp_path / "baseline.csv").write_text("\n".join(baseline_lines) + "\n", encoding="utf-8")

    sst = [27, 27, 27, 27, 27, 30.5, 30.5, 30.5, 30.5, 30.5]
    archive_lines = ["date,jimbaran,nusadua,sanur"]
    for day, value in enumerate(sst, start=1):
        archive_lines.append(f"{day:02d}/01/2025,{value},28.0,")
    (tmp_path / "current_sst.csv").write_text("\n".join(archive_lines) + "\n", encoding="utf-8")

    config = {
        "environment": "test",
        "locations": {
            "jimbaran": {"name": "Jimbaran"},
            "nusadua": {"name": "Nusa Dua"},
            "sanur": {"name": "Sanur"},
        },
        "files": {
            "archive": str(tmp_path / "current_sst.csv"),
            "baseline": str(tmp_path / "baseline.csv"),
        },
        "detection": {"min_duration": 5},
        "processing": {"timezone": "Asia/Singapore"},
    }
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(config), encoding="utf-8")
    return tmp_path, str(config_path)


@pytest.mark.integration
class TestMarineHeatwaveApp:
    """End-to-end tests for MarineHeatwaveApp."""

    def test_run_detects_event(self, workspace):
        """Test the reference scenario through files and the app."""
        tmp_path, config_path = workspace
        events_path = tmp_path / "events.csv"

        app = MarineHeatwaveApp(config_file=config_path)
        result = app.run("jimbaran", "2025-01-01", "2025-01-10", events_out=str(events_path))

        assert len(result.events) == 1
        event = result.events[0]
        assert (event.start, event.end, event.duration, event.category) == ("2025-01-06", "2025-01-10", 5, 2)
        assert event.cumulative_anomaly == pytest.approx(7.5)

        _, rows = read_table(events_path)
        assert rows[0]["start"] == "2025-01-06"
        assert rows[0]["category_label"] == "Category II"

    def test_import_hourly_and_save(self, workspace):
        """Test hourly payloads merge per field and the archive is saved canonical."""
        tmp_path, config_path = workspace
        payload = {
            "hourly": {
                "time": ["2025-01-10T00:00", "2025-01-10T12:00", "2025-01-11T00:00"],
                "sea_surface_temperature": [28.0, 29.0, None],
            }
        }
        hourly_path = tmp_path / "sanur.json"
        hourly_path.write_text(json.dumps(payload), encoding="utf-8")

        app = MarineHeatwaveApp(config_file=config_path)
        app.run(
            "jimbaran", "2025-01-01", "2025-01-10",
            hourly={"sanur": str(hourly_path)},
            save=True,
        )

        header, rows = read_table(tmp_path / "current_sst.csv")
        assert header == ["date", "jimbaran", "nusadua", "sanur"]
        assert [row["date"] for row in rows][:2] == ["2025-01-01", "2025-01-02"]
        last = rows[-1]
        assert last["date"] == "2025-01-10"
        assert last["jimbaran"] == "30.5"
        assert last["sanur"] == "28.5"

    def test_import_table_overrides(self, workspace):
        """Test an imported edit breaks the event."""
        tmp_path, config_path = workspace
        edit_path = tmp_path / "edits.tsv"
        edit_path.write_text("Date\tJimbaran\n2025-01-08\t28,0\n", encoding="utf-8")

        app = MarineHeatwaveApp(config_file=config_path)
        result = app.run("jimbaran", "2025-01-01", "2025-01-10", imports=[str(edit_path)])

        assert result.events == []
        assert app.store.get("2025-01-08", "nusadua") == pytest.approx(28.0)

    def test_missing_archive_starts_empty(self, workspace):
        """Test a missing archive file is not an error."""
        tmp_path, config_path = workspace
        (tmp_path / "current_sst.csv").unlink()

        app = MarineHeatwaveApp(config_file=config_path)
        result = app.run("sanur", "2025-01-01", "2025-01-31")

        assert len(app.store) == 0
        assert result.events == []

    def test_unknown_location(self, workspace):
        """Test unknown locations are rejected."""
        _, config_path = workspace

        app = MarineHeatwaveApp(config_file=config_path)
        app.load_baseline()

        with pytest.raises(ValueError, match="Unknown location"):
            app.detect("kuta", "2025-01-01", "2025-01-10")

    def test_detect_requires_baseline(self, workspace):
        """Test detection before loading the baseline fails loudly."""
        _, config_path = workspace

        app = MarineHeatwaveApp(config_file=config_path)

        with pytest.raises(RuntimeError):
            app.detect("jimbaran", "2025-01-01", "2025-01-10")
