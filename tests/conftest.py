import pytest
from signbridge.landmarks import HandPose

UP_Y = 0.3
DOWN_Y = 0.7
JOINT_Y = 0.5


def make_pose(thumb=False, index=False, middle=False, ring=False, pinky=False,
              thumb_x=0.3, index_x=0.5, wrist_x=0.5, hand_id=None, handedness="Right"):
    """
    Build a synthetic upright hand. Every joint sits at y=0.5, extended tips
    at y=0.3 and curled tips at y=0.7.
    """
    points = [[0.5, JOINT_Y, 0.0] for _ in range(21)]
    points[HandPose.WRIST] = [wrist_x, 0.9, 0.0]

    fingers = [
        (thumb, HandPose.THUMB_TIP),
        (index, HandPose.INDEX_TIP),
        (middle, HandPose.MIDDLE_TIP),
        (ring, HandPose.RING_TIP),
        (pinky, HandPose.PINKY_TIP),
    ]
    for extended, tip in fingers:
        points[tip][1] = UP_Y if extended else DOWN_Y

    points[HandPose.THUMB_TIP][0] = thumb_x
    points[HandPose.INDEX_TIP][0] = index_x
    return HandPose.from_points(points, handedness=handedness, hand_id=hand_id)


@pytest.fixture
def pose_factory():
    return make_pose
