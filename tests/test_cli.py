import pytest

from tsp_evolution import cli
from tsp_evolution.cli import build_parser, main
from tsp_evolution.data import read_city_file


def test_generate_writes_city_file(tmp_path, capsys):
    out = tmp_path / "cities.txt"
    assert main(["generate", str(out), "--count", "6", "--seed", "1"]) == 0
    assert len(read_city_file(out)) == 6
    assert "Wrote 6 cities" in capsys.readouterr().out


def test_run_from_city_file(tmp_path, capsys):
    cities = tmp_path / "cities.txt"
    cities.write_text("0  0\n0  10\n10  10\n10  0\n5  5\n")
    code = main(
        [
            "run",
            "--cities", str(cities),
            "--crossover", "ox",
            "--mutation", "transposition",
            "--population", "10",
            "--generations", "15",
            "--stop-policy", "limit",
            "--reruns", "2",
            "--seed", "4",
        ]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert out.count("SUMMARY:") == 2
    assert "Path Representation, OX, Transposition" in out
    assert "after 30 generations" in out
    assert "10/10th" in out


def test_run_random_cities_and_export(tmp_path, capsys):
    export = tmp_path / "export.txt"
    code = main(
        ["run", "--random", "8", "--population", "6", "--generations", "3", "--seed", "2",
         "--save-cities", str(export)]
    )
    assert code == 0
    assert len(read_city_file(export)) == 8
    assert "File saved" in capsys.readouterr().out


def test_run_reports_missing_file(tmp_path, capsys):
    code = main(["run", "--cities", str(tmp_path / "missing.txt")])
    assert code == 1
    assert "error:" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["run", "--elite-ratio", "1.5"],
        ["run", "--mutation-chance", "-0.1"],
        ["run", "--population", "2"],
        ["run", "--random", "2"],
        ["run", "--crossover", "erx"],
        ["run", "--cities", "a.txt", "--tsplib", "b.tsp"],
    ],
)
def test_invalid_arguments_rejected(argv):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(argv)
    assert exc.value.code == 2


def test_defaults_follow_stall_policy():
    args = build_parser().parse_args(["run"])
    assert args.stop_policy == "stall"
    assert args.crossover == "cx"
    assert args.population == 100


def test_run_seeds_worker_through_settings(monkeypatch):
    created = []

    class RecordingWorker(cli.EvolutionWorker):
        def __init__(self, dist_mat, settings, rng=None):
            created.append((settings, rng))
            super().__init__(dist_mat, settings, rng)

    monkeypatch.setattr(cli, "EvolutionWorker", RecordingWorker)
    assert main(["run", "--random", "6", "--population", "5", "--generations", "2", "--seed", "4"]) == 0
    settings, rng = created[0]
    assert settings.random_seed == 4
    assert rng is None


def test_run_rejects_asymmetric_tsplib(tmp_path, capsys):
    path = tmp_path / "tiny3.atsp"
    path.write_text(
        "NAME : tiny3\nTYPE : ATSP\nDIMENSION : 3\nEDGE_WEIGHT_TYPE : EXPLICIT\n"
        "EDGE_WEIGHT_FORMAT : FULL_MATRIX\nEDGE_WEIGHT_SECTION\n0 1 9\n5 0 2\n3 7 0\nEOF\n"
    )
    assert main(["run", "--tsplib", str(path)]) == 1
    assert "asymmetric" in capsys.readouterr().err


def test_run_refuses_to_export_fractional_tsplib(tmp_path, capsys):
    path = tmp_path / "frac3.tsp"
    path.write_text(
        "NAME : frac3\nTYPE : TSP\nDIMENSION : 3\nEDGE_WEIGHT_TYPE : EUC_2D\n"
        "NODE_COORD_SECTION\n1 0.5 0\n2 3 0\n3 3 4.25\nEOF\n"
    )
    export = tmp_path / "export.txt"
    code = main(
        ["run", "--tsplib", str(path), "--population", "4", "--generations", "2",
         "--stop-policy", "limit", "--save-cities", str(export)]
    )
    assert code == 1
    assert not export.exists()
    assert "integer city coordinates" in capsys.readouterr().err
