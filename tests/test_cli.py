import csv
import json

import pytest

from ffengine.cli import main

from tests.sample_data import qb_raw, wr_raw


@pytest.fixture()
def inputs(tmp_path):
    players = tmp_path / "players.json"
    players.write_text(
        json.dumps(
            [
                {"id": "1", "nm": "Joe Quarterback", "pos": "QB", "tm": "CIN"},
                {"id": "2", "nm": "Will Receiver", "pos": "WR", "tm": "CIN"},
                {"id": "3", "nm": "Max Target", "pos": "WR", "tm": "DEN"},
            ]
        ),
        encoding="utf-8",
    )
    stats = tmp_path / "stats.json"
    stats.write_text(
        json.dumps(
            {
                "1": {"2024": qb_raw(17, 560, 4200, 32)},
                "2": {"2024": wr_raw(17, 150, 100, 1350, 10)},
                "3": {"2024": {"gamesPlayed": 15, "tgts": 70, "receptions": 45, "receivingYards": 520}},
            }
        ),
        encoding="utf-8",
    )
    depth = tmp_path / "depth.json"
    depth.write_text(json.dumps({"CIN": {"QB": ["1"], "WR": ["2"]}}), encoding="utf-8")
    standings = tmp_path / "standings.json"
    standings.write_text(json.dumps({"CIN": {"wins": 9, "losses": 8}}), encoding="utf-8")
    return players, stats, depth, standings


def test_cli_writes_csv(inputs, tmp_path, capsys):
    players, stats, depth, standings = inputs
    output = tmp_path / "rankings.csv"
    main(
        [
            str(players),
            "--stats", str(stats),
            "--depth-charts", str(depth),
            "--standings", str(standings),
            "--output", str(output),
        ]
    )

    err = capsys.readouterr().err
    assert "Ranked 3 players (PPR, 4pt passing TD); showing 3" in err
    with output.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["overall_rank"] for row in rows] == ["1", "2", "3"]
    assert {row["player_id"] for row in rows} == {"1", "2", "3"}
    by_id = {row["player_id"]: row for row in rows}
    assert "Confirmed starter." in by_id["1"]["note"]
    assert by_id["1"]["consensus_rank"] == ""


def test_cli_json_with_filters_and_aliases(inputs, tmp_path, capsys):
    players, stats, _depth, _standings = inputs
    profile = tmp_path / "aliases.json"
    main(
        [
            str(players),
            "--stats", str(stats),
            "--scoring", "half",
            "--td-pts", "6",
            "--position", "WR",
            "--limit", "5",
            "--stat-alias", "tgt=tgts",
            "--save-profile", str(profile),
            "--json",
        ]
    )
    captured = capsys.readouterr()
    assert f"Saved alias profile to {profile}" in captured.err
    assert "Ranked 3 players (Half-PPR, 6pt passing TD); showing 2" in captured.err
    rows = json.loads(captured.out)
    assert [row["position"] for row in rows] == ["WR", "WR"]
    assert [row["position_rank"] for row in rows] == ["WR1", "WR2"]
    assert json.loads(profile.read_text(encoding="utf-8")) == {"stat_aliases": {"tgt": ["tgts"]}}


def test_cli_loads_profile(inputs, tmp_path, capsys):
    players, stats, _depth, _standings = inputs
    profile = tmp_path / "aliases.json"
    profile.write_text(json.dumps({"stat_aliases": {"tgt": ["tgts"]}}), encoding="utf-8")
    main([str(players), "--stats", str(stats), "--load-profile", str(profile), "--json"])
    out = capsys.readouterr().out
    rows = json.loads(out)
    assert len(rows) == 3


def test_cli_rejects_bad_alias(inputs):
    players, _stats, _depth, _standings = inputs
    with pytest.raises(SystemExit):
        main([str(players), "--stat-alias", "kick_yd=kickYards"])
    with pytest.raises(SystemExit):
        main([str(players), "--stat-alias", "no-equals-sign"])
