import json

from mocapbvh.batch_validate import BatchValidator, main as validate_main
from mocapbvh.config import ParserConfig
from mocapbvh.main import format_tree, main
from mocapbvh import loads_bvh


def test_summary(simple_bvh_file, capsys):
    assert main([str(simple_bvh_file)]) == 0
    out = capsys.readouterr().out
    assert "Root: Hips" in out
    assert "Joints: 2" in out
    assert "Channels: 9" in out
    assert "2 frames" in out


def test_joints_and_frame(simple_bvh_file, capsys):
    assert main([str(simple_bvh_file), "--joints", "--frame", "1"]) == 0
    out = capsys.readouterr().out
    assert "  Spine [6:9] Zrotation Xrotation Yrotation" in out
    assert "Spine_End (end site)" in out
    assert "Spine: Zrotation=16.0000, Xrotation=17.0000, Yrotation=18.0000" in out


def test_frame_out_of_range(simple_bvh_file, capsys):
    assert main([str(simple_bvh_file), "--frame", "5"]) == 1
    assert "out of range" in capsys.readouterr().err


def test_parse_error_exit_status(tmp_path, simple_bvh, capsys):
    path = tmp_path / "bad.bvh"
    path.write_text(simple_bvh.replace("End Site", "End Effector"))
    assert main([str(path)]) == 1
    assert "END must be followed by SITE" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "none.bvh")]) == 1


def test_format_tree(branched_bvh):
    lines = format_tree(loads_bvh(branched_bvh).root).splitlines()
    assert lines[0].startswith("Hips [0:6]")
    assert lines[1].startswith("  LeftUpLeg [6:9]")
    assert lines[2].startswith("    LeftLeg [9:12]")
    assert lines[3] == "      LeftLeg_End (end site)"


def make_tree(root, simple_bvh):
    (root / "a").mkdir()
    (root / "a" / "good.bvh").write_text(simple_bvh)
    (root / "b.bvh").write_text(simple_bvh.replace("Frames: 2", "Frames: 4"))
    (root / "notes.txt").write_text("not a bvh file")


def test_batch_validator(tmp_path, simple_bvh):
    make_tree(tmp_path, simple_bvh)
    validator = BatchValidator(tmp_path, ParserConfig(), max_workers=2)

    files = validator.discover_files()
    assert [p.name for p in files] == ["good.bvh", "b.bvh"]

    report = validator.run(progress=False)
    assert report.total_files == 2
    assert report.valid == 1
    assert report.invalid == 1
    assert report.total_frames == 2
    assert report.failed_files[0]['error_type'] == "TruncatedMotionError"


def test_batch_validator_missing_dir(tmp_path):
    report = BatchValidator(tmp_path / "missing").run(progress=False)
    assert report.total_files == 0


def test_validate_main_writes_report(tmp_path, simple_bvh):
    data = tmp_path / "data"
    data.mkdir()
    make_tree(data, simple_bvh)
    report_path = tmp_path / "out" / "report.json"

    assert validate_main([str(data), "--no-progress", "--report", str(report_path)]) == 1

    report = json.loads(report_path.read_text())
    assert report['valid'] == 1
    assert report['failed_files'][0]['path'].endswith("b.bvh")
