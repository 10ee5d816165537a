import json

from exif_stats import main as cli


def test_main_prints_report(fake_exif, tmp_path, capsys):
    (tmp_path / "a.jpg").write_bytes(b"x")
    (tmp_path / "b.jpg").write_bytes(b"x")
    fake_exif["a.jpg"] = [("FNumber", "2.8"), ("FocalLength", "35 mm")]
    fake_exif["b.jpg"] = [("FNumber", "2.8")]

    code = cli.main([str(tmp_path), "--no-progress", "--workers", "2"])

    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    report = json.loads(lines[0])
    assert report["F number"] == {"2.8": 2}
    assert report["Lens focal length"] == {"35 mm": 1}
    assert lines[1] == "files_visited=2 images_decoded=2"


def test_main_missing_path_returns_error(tmp_path):
    assert cli.main([str(tmp_path / "missing"), "--no-progress"]) == 1


def test_main_years_and_save_dir(fake_exif, tmp_path, capsys):
    src = tmp_path / "photos"
    (src / "2021").mkdir(parents=True)
    (src / "2021" / "y.jpg").write_bytes(b"x")
    fake_exif["y.jpg"] = [("ExposureTime", "1/500")]
    out_dir = tmp_path / "reports"

    code = cli.main([str(src), "--years", "2021", "2022", "--save-dir", str(out_dir), "--no-progress"])

    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("2021: ")
    assert "2022: " in out

    saved = json.loads((out_dir / "camera_photo_analyze_report2021.json").read_text(encoding="utf-8"))
    assert saved["Exposure time"] == {"1/500": 1}
    assert (out_dir / "camera_photo_analyze_report2022.json").exists()


def test_parse_args_defaults(tmp_path):
    args = cli.parse_args([str(tmp_path)])
    assert args.years is None
    assert args.max_depth == 4
    assert args.save_dir is None
