"""Shared BVH fixtures."""

import pytest


SIMPLE_BVH = """\
HIERARCHY
ROOT Hips
{
	OFFSET 0.0 0.0 0.0
	CHANNELS 6 Xposition Yposition Zposition Zrotation Xrotation Yrotation
	JOINT Spine
	{
		OFFSET 0.0 5.0 0.0
		CHANNELS 3 Zrotation Xrotation Yrotation
		End Site
		{
			OFFSET 0.0 3.0 0.0
		}
	}
}
MOTION
Frames: 2
Frame Time: 0.0333
1 2 3 4 5 6 7 8 9
10 11 12 13 14 15 16 17 18
"""


BRANCHED_BVH = """\
HIERARCHY
ROOT Hips
{
  OFFSET 1.5 90.0 -2.0
  CHANNELS 6 Xposition Yposition Zposition Zrotation Xrotation Yrotation
  JOINT LeftUpLeg
  {
    OFFSET 10.0 0.0 0.0
    CHANNELS 3 Zrotation Xrotation Yrotation
    JOINT LeftLeg
    {
      OFFSET 0.0 -40.0 0.0
      CHANNELS 3 Zrotation Xrotation Yrotation
      End Site
      {
        OFFSET 0.0 -40.0 0.0
      }
    }
  }
  JOINT RightUpLeg
  {
    OFFSET -10.0 0.0 0.0
    CHANNELS 3 Zrotation Xrotation Yrotation
    End Site
    {
      OFFSET 0.0 -80.0 0.0
    }
  }
}
MOTION
Frames: 3
Frame Time: 0.008333
0 90 0 0 0 0 1 2 3 4 5 6 7 8 9
0.5 90.5 0.5 1 1 1 2 2 2 3 3 3 4 4 4
1 91 1 2 2 2 3 3 3 4 4 4 5 5 5
"""


@pytest.fixture
def simple_bvh():
    return SIMPLE_BVH


@pytest.fixture
def branched_bvh():
    return BRANCHED_BVH


@pytest.fixture
def simple_bvh_file(tmp_path):
    path = tmp_path / "simple.bvh"
    path.write_text(SIMPLE_BVH)
    return path
