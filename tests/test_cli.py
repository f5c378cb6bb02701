"""End-to-end tests for the command line entry point"""

import csv
import json

from event_rotator import cli


def _write_batch(tmp_path, batch):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(batch), encoding="utf-8")
    return path


def _args(tmp_path, *extra):
    return [
        "--config", str(tmp_path / "missing.yml"),
        "--out", str(tmp_path / "out" / "events.json"),
        "--log", str(tmp_path / "out" / "rotator.log"),
        *extra,
    ]


class TestCli:

    def test_input_file_to_json_and_csv(self, tmp_path):
        batch = _write_batch(tmp_path, [
            {"city": "Oslo", "country": "Norway", "website": "oslo.no", "start_date": "2024-03-01",
             "event_status": "G", "location": {"lat": 59.9, "lng": 10.7}},
            {"city": "Dropped", "event_status": "X"},
        ])
        csv_path = tmp_path / "out" / "events.csv"

        rc = cli.main(_args(tmp_path, "--input", str(batch), "--csv", str(csv_path)))

        assert rc == 0
        views = json.loads((tmp_path / "out" / "events.json").read_text(encoding="utf-8"))
        assert views == [{
            "location": "Oslo, Norway",
            "period": "March 1 – 3",
            "has_website": True,
            "website_url": "http://oslo.no",
        }]
        with open(csv_path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows == [{"location": "Oslo, Norway", "period": "March 1 – 3", "website": "http://oslo.no"}]

    def test_status_filter_option(self, tmp_path):
        batch = _write_batch(tmp_path, [{"city": "Unmapped", "event_status": "W"}])
        rc = cli.main(_args(tmp_path, "--input", str(batch), "--filter", "status"))
        assert rc == 0
        views = json.loads((tmp_path / "out" / "events.json").read_text(encoding="utf-8"))
        assert [v["location"] for v in views] == ["Unmapped"]

    def test_malformed_batch_exits_2(self, tmp_path):
        batch = _write_batch(tmp_path, {"events": []})
        assert cli.main(_args(tmp_path, "--input", str(batch))) == 2

    def test_bad_config_exits_2(self, tmp_path):
        cfg = tmp_path / "rotator.yml"
        cfg.write_text("filter: nope\n", encoding="utf-8")
        args = _args(tmp_path, "--input", str(_write_batch(tmp_path, [])))
        args[1] = str(cfg)
        assert cli.main(args) == 2

    def test_build_config_overrides(self, tmp_path):
        cfg = tmp_path / "rotator.yml"
        cfg.write_text("url: http://feed.test/\nquery:\n  since: '2024-01-01'\n", encoding="utf-8")
        args = cli.parse_args(["--config", str(cfg), "--until", "2024-02-01"])
        config = cli.build_config(args)
        assert config.url == "http://feed.test/"
        assert config.query == {"since": "2024-01-01", "until": "2024-02-01"}
