import pytest
from signbridge.classifier import (
    GESTURE_RULES,
    GestureClassifier,
    GestureLabel,
    GestureRule,
    extract_features,
)
from signbridge.config import ClassifierConfig
from signbridge.landmarks import HandPose, distance_2d, horizontal_distance, is_finger_extended


@pytest.fixture
def classifier():
    return GestureClassifier(ClassifierConfig())


def test_finger_extended_uses_image_y_axis():
    assert is_finger_extended((0.5, 0.2), (0.5, 0.4))
    assert not is_finger_extended((0.5, 0.4), (0.5, 0.2))
    # Equal height is not extended
    assert not is_finger_extended((0.5, 0.4), (0.5, 0.4))


def test_geometry_helpers_ignore_z():
    assert distance_2d((0.0, 0.0, 5.0), (0.3, 0.4, -5.0)) == pytest.approx(0.5)
    assert horizontal_distance((0.2, 0.9), (0.5, 0.1)) == pytest.approx(0.3)


def test_from_points_pads_missing_z():
    pose = HandPose.from_points([(0.1, 0.2)] * 21, handedness="Left")
    assert pose.landmarks[0] == (0.1, 0.2, 0.0)
    assert pose.hand_id == "Left"


def test_extract_features(pose_factory):
    features = extract_features(pose_factory(thumb=True, index=True, pinky=True))
    assert (features.thumb, features.index, features.middle, features.ring, features.pinky) == \
        (True, True, False, False, True)
    assert features.thumb_index_distance == pytest.approx(0.2)
    assert features.thumb_wrist_distance == pytest.approx(0.2)


def test_rule_order_is_fixed():
    assert [rule.label for rule in GESTURE_RULES] == [
        GestureLabel.I_LOVE_YOU,
        GestureLabel.A,
        GestureLabel.B,
        GestureLabel.HELLO,
        GestureLabel.PEACE,
    ]


def test_i_love_you(classifier, pose_factory):
    pose = pose_factory(thumb=True, index=True, pinky=True)
    assert classifier.classify(pose) == GestureLabel.I_LOVE_YOU
    assert classifier.classify(pose) == "I ❤️ You"


def test_letter_a(classifier, pose_factory):
    assert classifier.classify(pose_factory(thumb=True)) == GestureLabel.A


def test_letter_b_ignores_thumb_state(classifier, pose_factory):
    # Thumb tucked within 0.1 of the wrist horizontally
    for thumb in (True, False):
        pose = pose_factory(thumb=thumb, index=True, middle=True, thumb_x=0.55)
        assert classifier.classify(pose) == GestureLabel.B


def test_hello(classifier, pose_factory):
    pose = pose_factory(thumb=True, index=True, middle=True, ring=True, pinky=True)
    assert classifier.classify(pose) == GestureLabel.HELLO


def test_peace(classifier, pose_factory):
    pose = pose_factory(index=True, middle=True)
    assert classifier.classify(pose) == GestureLabel.PEACE
    assert classifier.classify(pose) == "Peace"


def test_b_wins_over_peace_when_both_match(classifier, pose_factory):
    pose = pose_factory(index=True, middle=True, thumb_x=0.52)
    assert classifier.classify(pose) == GestureLabel.B


def test_no_gesture(classifier, pose_factory):
    assert classifier.classify(pose_factory()) is None
    assert classifier.classify(pose_factory(index=True)) is None
    assert classifier.classify(pose_factory(thumb=True, index=True, middle=True)) is None


def test_thumb_index_distance_is_strict(classifier, pose_factory):
    at_threshold = pose_factory(thumb=True, index=True, pinky=True, thumb_x=0.0, index_x=0.1)
    just_above = pose_factory(thumb=True, index=True, pinky=True, thumb_x=0.0, index_x=0.1000001)

    assert extract_features(at_threshold).thumb_index_distance == 0.1
    assert classifier.classify(at_threshold) is None
    assert classifier.classify(just_above) == GestureLabel.I_LOVE_YOU


def test_thresholds_come_from_config(pose_factory):
    pose = pose_factory(thumb=True, index=True, pinky=True)
    strict = GestureClassifier(ClassifierConfig(thumb_index_min_distance=0.5))
    assert strict.classify(pose) is None


def test_classify_is_deterministic(classifier, pose_factory):
    pose = pose_factory(index=True, middle=True)
    assert len({classifier.classify(pose) for _ in range(10)}) == 1


def test_first_matching_rule_wins():
    always = lambda features, cfg: True
    rules = [
        GestureRule(GestureLabel.HELLO, always),
        GestureRule(GestureLabel.PEACE, always),
    ]
    pose = HandPose.from_points([(0.5, 0.5)] * 21)
    assert GestureClassifier(rules=rules).classify(pose) == GestureLabel.HELLO
    assert GestureClassifier(rules=rules[::-1]).classify(pose) == GestureLabel.PEACE


def test_incomplete_pose_is_no_gesture(classifier):
    assert classifier.classify(HandPose.from_points([(0.5, 0.5)] * 5)) is None
    assert classifier.classify(HandPose(landmarks=[])) is None
