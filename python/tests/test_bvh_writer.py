import numpy as np

from mocapbvh import BVHWriter, loads_bvh, load_bvh, write_bvh


def assert_same_tree(a, b):
    assert a.name == b.name
    assert a.is_end_site == b.is_end_site
    assert a.channel_layout == b.channel_layout
    assert a.motion_start_index == b.motion_start_index
    np.testing.assert_allclose(a.offset, b.offset)
    assert len(a.children) == len(b.children)
    for x, y in zip(a.children, b.children):
        assert_same_tree(x, y)


def test_written_text_parses_back(branched_bvh):
    original = loads_bvh(branched_bvh)
    text = BVHWriter(original).dumps()
    parsed = loads_bvh(text)

    assert_same_tree(original.root, parsed.root)
    assert parsed.total_channels == original.total_channels
    np.testing.assert_allclose(parsed.motion.values, original.motion.values)
    assert parsed.frame_time == original.frame_time


def test_layout(simple_bvh):
    text = BVHWriter(loads_bvh(simple_bvh), precision=2).dumps()
    lines = text.splitlines()
    assert lines[0] == "HIERARCHY"
    assert lines[1] == "ROOT Hips"
    assert "\tOFFSET\t0.00\t0.00\t0.00" in lines
    assert "\t\tEnd Site" in lines
    assert "MOTION" in lines
    assert "Frames:\t2" in lines
    assert lines[-1] == "\t".join(f"{v:.2f}" for v in range(10, 19))


def test_write_file(tmp_path, simple_bvh):
    path = tmp_path / "out.bvh"
    write_bvh(loads_bvh(simple_bvh), str(path))
    assert load_bvh(path).frame_count == 2


def test_multiple_segments_are_kept():
    text = """\
HIERARCHY
ROOT A
{
	OFFSET 0 0 0
	CHANNELS 1 Xrotation
}
MOTION
Frames: 1
Frame Time: 0.1
1
Frames: 2
Frame Time: 0.2
2
3
"""
    dataset = loads_bvh(BVHWriter(loads_bvh(text)).dumps())
    assert [m.frame_count for m in dataset.motions] == [1, 2]


def test_write_file_is_utf8(tmp_path, simple_bvh):
    path = tmp_path / "named.bvh"
    write_bvh(loads_bvh(simple_bvh.replace("Spine", "Wirbelsäule")), str(path))
    assert "Wirbelsäule".encode("utf-8") in path.read_bytes()
    assert load_bvh(path).joint_names == ["Hips", "Wirbelsäule"]
