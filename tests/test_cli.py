"""End-to-end tests for the command-line interface."""

from datetime import date

import pytest

from review_scheduler.cli import main
from review_scheduler.domain.db import get_session, init_database
from review_scheduler.domain.models import Employee, Schedule


@pytest.fixture
def db_url(tmp_path):
    """File-backed database seeded with two employees and one schedule."""
    url = f"sqlite:///{tmp_path / 'scheduler.db'}"
    init_database(url)

    session = get_session(url)
    session.add_all([
        Employee(id="e1", name="Ann", skills=["DAR", "CPOE"]),
        Employee(id="e2", name="Bob", skills=["Trace"]),
        Schedule(
            id="s1",
            name="Week 1",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 7),
            status="draft",
            dar_count=3,
            assignments={"e1": {"dars": [0], "cpoe": True}, "e2": {"dars": [1]}},
            dar_entities={"0": ["E1"]},
        ),
    ])
    session.commit()
    session.close()
    return url


@pytest.mark.integration
def test_analyze(db_url, capsys):
    """Test the analysis report."""
    main(["--db", db_url, "analyze", "--schedule", "s1"])
    out = capsys.readouterr().out

    assert "[INFO] Schedule Week 1" in out
    assert "Conflicts: 1" in out
    assert "Bob is assigned to DAR 2 but lacks DAR or Float skill" in out


@pytest.mark.integration
def test_validate(db_url, capsys):
    """Test validation of a stored schedule."""
    main(["--db", db_url, "validate", "--schedule", "s1"])
    assert "[OK] Validation passed for Week 1" in capsys.readouterr().out


@pytest.mark.integration
def test_export(db_url, tmp_path, capsys):
    """Test CSV export with the optional summary."""
    out = tmp_path / "week1.csv"
    summary = tmp_path / "week1_summary.csv"
    main(["--db", db_url, "export", "--schedule", "s1", "--out", str(out), "--summary", str(summary)])

    assert out.exists()
    assert summary.exists()
    assert "[OK] Exported 2 employees" in capsys.readouterr().out


@pytest.mark.integration
def test_missing_schedule_exits(db_url, capsys):
    """Test an unknown schedule id."""
    with pytest.raises(ValueError, match="No schedule found"):
        main(["--db", db_url, "analyze", "--schedule", "nope"])
    assert "[ERROR] Analysis failed" in capsys.readouterr().out


def test_init_db_uses_config_db_url(tmp_path, capsys):
    """Test that db_url from the config file is used when --db is omitted."""
    db_file = tmp_path / "from_config.db"
    config = tmp_path / "scheduler.yaml"
    config.write_text(f"db_url: sqlite:///{db_file}\n", encoding="utf-8")

    main(["--config", str(config), "init-db"])

    assert db_file.exists()
    assert "[OK] Database ready" in capsys.readouterr().out
