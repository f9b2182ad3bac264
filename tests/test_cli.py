"""Tests for the avyforecast command-line tool."""

import json

import pytest

from avyforecast.cli import main
from avyforecast.models.schemas import ForecastDraft


class TestMatrixCommand:
    def test_prints_all_rows(self, capsys):
        main(["matrix"])
        out = capsys.readouterr().out
        assert "5 Catastrophic" in out
        rows = [line.split() for line in out.splitlines()[2:]]
        assert rows[0] == ["5", "Certain", "3", "4", "4", "5", "5"]
        assert rows[-1] == ["1", "Unlikely", "1", "1", "2", "3", "3"]


class TestCalculateCommand:
    def test_flags_json(self, capsys):
        main(
            [
                "calculate",
                "--primary-likelihood", "4",
                "--primary-size", "2",
                "--primary-sectors", "alp_N,alp_NE",
                "--no-secondary",
                "--json",
            ]
        )
        out = capsys.readouterr().out
        assert json.loads(out) == {"danger_alp": 3, "danger_tl": 1, "danger_btl": 1}

    def test_secondary_contributes(self, capsys):
        main(
            [
                "calculate",
                "--primary-sectors", "alp_N",
                "--secondary-likelihood", "5",
                "--secondary-size", "4",
                "--secondary-sectors", "btl_S",
                "--json",
            ]
        )
        assert json.loads(capsys.readouterr().out) == {
            "danger_alp": 3,
            "danger_tl": 1,
            "danger_btl": 5,
        }

    def test_text_output(self, capsys):
        main(["calculate", "--primary-sectors", "tl_W"])
        out = capsys.readouterr().out
        assert "Treeline" in out
        assert "3 Considerable" in out
        assert "Below Treeline" in out

    def test_from_file(self, tmp_path, capsys):
        draft = ForecastDraft()
        draft.primary.likelihood = 5
        draft.primary.size = 5
        draft.primary.sectors = ["btl_E"]
        path = tmp_path / "draft.json"
        path.write_text(draft.model_dump_json())

        main(["calculate", "--file", str(path), "--json"])
        assert json.loads(capsys.readouterr().out)["danger_btl"] == 5

    def test_invalid_sector_exits_2(self):
        with pytest.raises(SystemExit) as exc:
            main(["calculate", "--primary-sectors", "summit_N"])
        assert exc.value.code == 2

    def test_out_of_range_level_exits_2(self):
        with pytest.raises(SystemExit) as exc:
            main(["calculate", "--primary-likelihood", "9"])
        assert exc.value.code == 2

    def test_missing_file_exits_2(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["calculate", "--file", str(tmp_path / "nope.json")])
        assert exc.value.code == 2


class TestRoseCommand:
    def test_stdout(self, capsys):
        main(["rose", "--sectors", "alp_N"])
        assert capsys.readouterr().out.startswith("<svg")

    def test_output_file(self, tmp_path, capsys):
        out = tmp_path / "svg" / "rose.svg"
        main(["rose", "--sectors", "alp_N,tl_E", "--variant", "secondary", "--output", str(out)])
        assert out.exists()
        assert 'data-sector="tl_E"' in out.read_text()
        assert "Rose saved to" in capsys.readouterr().out


class TestAuditCommand:
    def test_findings_exit_1(self, sample_records_df, tmp_path, capsys):
        path = tmp_path / "forecasts.csv"
        sample_records_df.to_csv(path, index=False)
        report_path = tmp_path / "report.csv"

        with pytest.raises(SystemExit) as exc:
            main(["audit", "--input", str(path), "--output", str(report_path)])
        assert exc.value.code == 1
        assert report_path.exists()
        assert "Overall: FAIL" in capsys.readouterr().out

    def test_clean_export_passes(self, sample_records_df, tmp_path, capsys):
        path = tmp_path / "forecasts.csv"
        sample_records_df.iloc[:1].to_csv(path, index=False)

        main(["audit", "--input", str(path)])
        assert "Overall: PASS" in capsys.readouterr().out

    def test_unsupported_format_exits_2(self, tmp_path):
        path = tmp_path / "forecasts.txt"
        path.write_text("")
        with pytest.raises(SystemExit) as exc:
            main(["audit", "--input", str(path)])
        assert exc.value.code == 2


class TestNoCommand:
    def test_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1
        assert "usage" in capsys.readouterr().out
