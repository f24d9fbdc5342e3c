"""
Tests for the finplan command-line interface.
"""

import json

import pandas as pd
import pytest

from finplanlab.cli import EXAMPLE_INPUT, main


def _run(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    captured = capsys.readouterr()
    return exc.value.code, captured.out, captured.err


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(EXAMPLE_INPUT))
    return path


def test_example_prints_valid_input(capsys):
    code, out, _ = _run(["example"], capsys)

    assert code == 0
    assert json.loads(out) == EXAMPLE_INPUT


def test_run_prints_summary_and_exports(example_file, tmp_path, capsys):
    output = tmp_path / "result.json"
    csv = tmp_path / "series.csv"

    code, out, err = _run(
        ["run", "-i", str(example_file), "-o", str(output), "--csv", str(csv)], capsys
    )

    assert code == 0
    summary = json.loads(out)
    assert summary["horizon_months"] == 120
    assert summary["risk_level"] in {"Low", "Medium", "High"}

    full = json.loads(output.read_text())
    assert len(full["net_worth"]) == 120
    assert "home:main" in full["breakdown"]["assets"]

    df = pd.read_csv(csv)
    assert len(df) == 120
    assert "net_worth" in df.columns
    assert "Results saved" in err


def test_run_reads_yaml(tmp_path, capsys):
    path = tmp_path / "plan.yaml"
    path.write_text(
        "baseMonth: '2026-01'\n"
        "horizonMonths: 3\n"
        "initialCash: 100\n"
        "events:\n"
        "  - startMonth: '2026-01'\n"
        "    monthlyAmount: -10\n"
    )
    code, out, _ = _run(["run", "-i", str(path)], capsys)

    assert code == 0
    assert json.loads(out)["final_cash_balance"] == pytest.approx(70)


def test_run_with_assumptions_file(tmp_path, capsys):
    plan = tmp_path / "plan.json"
    plan.write_text(
        json.dumps(
            {
                "baseMonth": "2026-01",
                "horizonMonths": 13,
                "events": [{"type": "rent", "startMonth": "2026-01", "monthlyAmount": -100}],
            }
        )
    )
    assumptions = tmp_path / "assumptions.yaml"
    assumptions.write_text("inflationRate: 0.1\n")
    output = tmp_path / "out.json"

    code, _, _ = _run(
        ["run", "-i", str(plan), "--assumptions", str(assumptions), "-o", str(output)],
        capsys,
    )

    assert code == 0
    assert json.loads(output.read_text())["net_cashflow"][12] == pytest.approx(-110)


def test_run_reports_warnings_on_stderr(tmp_path, capsys):
    plan = tmp_path / "plan.json"
    plan.write_text(
        json.dumps(
            {
                "baseMonth": "2026-01",
                "horizonMonths": 3,
                "positions": {
                    "loans": [
                        {
                            "startMonth": "2026-01",
                            "principal": 1000,
                            "annualInterestRate": 0.12,
                            "termMonths": 12,
                            "monthlyPayment": 1,
                        }
                    ]
                },
            }
        )
    )
    code, _, err = _run(["run", "-i", str(plan)], capsys)

    assert code == 0
    assert "Warning:" in err


def test_run_invalid_input_fails(tmp_path, capsys):
    plan = tmp_path / "plan.json"
    plan.write_text(json.dumps({"baseMonth": "2026-13", "horizonMonths": 3}))

    code, _, err = _run(["run", "-i", str(plan)], capsys)

    assert code == 1
    assert "Error running projection" in err


def test_validate(example_file, tmp_path, capsys):
    code, out, _ = _run(["validate", "-i", str(example_file)], capsys)
    assert code == 0
    assert "Valid: 120 months from 2026-01" in out

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"horizonMonths": 3}))
    code, out, _ = _run(["validate", "-i", str(bad)], capsys)
    assert code == 1
    assert "Validation failed" in out


def test_validate_missing_file(tmp_path, capsys):
    code, out, _ = _run(["validate", "-i", str(tmp_path / "nope.json")], capsys)
    assert code == 1


def test_catalog(capsys):
    code, out, _ = _run(["catalog"], capsys)
    assert code == 0
    assert "housing:" in out
    assert "salary" in out


def test_catalog_json(capsys):
    code, out, _ = _run(["catalog", "--json"], capsys)
    data = json.loads(out)

    assert code == 0
    assert data["investment"][0]["type"] == "investment_contribution"
    assert {"type", "label", "default_sign"} <= set(data["housing"][0])


def test_version(capsys):
    code, out, _ = _run(["--version"], capsys)
    assert code == 0
    assert "FinPlanLab 0.1.0" in out
