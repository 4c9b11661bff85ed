import math

import numpy as np
import pytest
import yaml

from dualarm_planner.geometry import ConfigError
from dualarm_planner.leg_ik import (
    LEFT_LEG_INITIAL_Q,
    RIGHT_LEG_INITIAL_Q,
    LegIKResult,
    calculate_distance,
    find_all_solutions,
    load_ee_poses_from_yaml,
    normalize_angle,
    pose_to_ik_input,
    save_leg_ik_result,
    solve_leg_ik,
)
from dualarm_planner.leg_transform import LINK1_KEY, LINK4_KEY, save_leg_transforms


def _transform(angle, position):
    c, s = math.cos(angle), math.sin(angle)
    tf = np.eye(4)
    tf[:3, :3] = [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]
    tf[:3, 3] = position
    return tf


@pytest.fixture
def pose_file(tmp_path):
    path = tmp_path / "leg_ik_cs.yaml"
    link1 = [_transform(0.1, [0.1, 0.2, 0.3]), _transform(0.2, [0.4, 0.5, 0.6])]
    link4 = [_transform(-0.1, [1.0, 1.1, 1.2]), _transform(-0.2, [1.3, 1.4, 1.5])]
    save_leg_transforms(path, link1, link4)
    return path, link1, link4


def test_load_ee_poses_round_trip(pose_file):
    path, link1, link4 = pose_file
    left = load_ee_poses_from_yaml(path, LINK1_KEY)
    right = load_ee_poses_from_yaml(path, LINK4_KEY)
    assert len(left) == 2 and len(right) == 2
    for pose, tf in zip(left, link1):
        assert np.allclose(pose, tf[:3, :].reshape(-1))
    for pose, tf in zip(right, link4):
        assert np.allclose(pose, tf[:3, :].reshape(-1))


def test_load_ee_poses_skips_missing_name(pose_file):
    path, _, _ = pose_file
    assert load_ee_poses_from_yaml(path, "no_such_transform") == []


def test_load_ee_poses_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_ee_poses_from_yaml(tmp_path / "absent.yaml", LINK1_KEY)


def test_pose_to_ik_input_identity_quaternion():
    trans, rot = pose_to_ik_input([1.0, 2.0, 3.0, 1.0, 0.0, 0.0, 0.0])
    assert trans == [1.0, 2.0, 3.0]
    assert np.allclose(rot, np.eye(3).reshape(-1))


def test_pose_to_ik_input_normalises_quaternion():
    _, rot = pose_to_ik_input([0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0])
    assert np.allclose(rot, np.eye(3).reshape(-1))


def test_pose_to_ik_input_matrix_layout():
    tf = _transform(0.3, [4.0, 5.0, 6.0])
    trans, rot = pose_to_ik_input(tf[:3, :].reshape(-1))
    assert np.allclose(trans, [4.0, 5.0, 6.0])
    assert np.allclose(rot, tf[:3, :3].reshape(-1))


def test_pose_to_ik_input_quaternion_matches_matrix():
    angle = 0.7
    quat = [0.0, 0.0, 0.0, math.cos(angle / 2), 0.0, 0.0, math.sin(angle / 2)]
    _, rot = pose_to_ik_input(quat)
    assert np.allclose(rot, _transform(angle, [0, 0, 0])[:3, :3].reshape(-1))


def test_pose_to_ik_input_rejects_bad_size():
    with pytest.raises(ValueError):
        pose_to_ik_input([0.0] * 5)


def test_normalize_angle_range_and_periodicity():
    for angle in (-3.0, -0.5, 0.0, 1.0, 3.0, 6.0):
        wrapped = normalize_angle(angle)
        assert 0.0 <= wrapped < 2 * math.pi
        assert math.isclose(math.cos(wrapped), math.cos(angle), abs_tol=1e-12)
        assert math.isclose(math.sin(wrapped), math.sin(angle), abs_tol=1e-12)


def test_normalize_angle_minus_pi_is_pi():
    assert math.isclose(normalize_angle(-math.pi), math.pi)


def test_calculate_distance():
    assert math.isclose(calculate_distance([0.0, 0.0], [3.0, 4.0]), 5.0)
    assert calculate_distance([1.0, 2.0], [1.0, 2.0]) == 0.0


def test_calculate_distance_uses_first_length():
    assert calculate_distance([], [1.0, 2.0]) == 0.0
    with pytest.raises(ValueError):
        calculate_distance([1.0, 2.0], [1.0])


def test_find_all_solutions_picks_closest():
    near = [0.1, 0.1, 0.1, 0.0, 0.1, 0.1]
    far = [2.0, 2.0, 2.0, 0.0, 2.0, 2.0]
    solutions, best = find_all_solutions(far + near, [0.0] * 6, 6)
    assert solutions == [far, near]
    assert best == near


def test_find_all_solutions_wraps_fourth_joint_near_pi():
    raw = [0.0, 0.0, 0.0, -3.0, 0.0, 0.0]
    solutions, best = find_all_solutions(raw, [0.0] * 6, 6)
    assert math.isclose(solutions[0][3], normalize_angle(-3.0))
    assert best == solutions[0]
    assert raw[3] == -3.0


def test_find_all_solutions_leaves_other_angles():
    solutions, _ = find_all_solutions([0.0, 0.0, 0.0, 1.0, 0.0, 0.0], [0.0] * 6, 6)
    assert solutions[0][3] == 1.0


def test_find_all_solutions_ignores_partial_tail_and_empty():
    solutions, best = find_all_solutions([0.0] * 8, [0.0] * 6, 6)
    assert len(solutions) == 1
    assert find_all_solutions([], [0.0] * 6, 6) == ([], [])


def test_save_leg_ik_result_round_trip(tmp_path):
    path = tmp_path / "result_cs.yaml"
    all_left = [[[1.0, 2.0], [3.0, 4.0]]]
    best_left = [[1.0, 2.0]]
    all_right = [[[5.0, 6.0]]]
    best_right = [[5.0, 6.0]]
    save_leg_ik_result(path, all_left, best_left, all_right, best_right)
    data = yaml.safe_load(path.read_text())
    assert list(data) == [
        "left_leg_solutions",
        "best_left_leg_solutions",
        "right_leg_solutions",
        "best_right_leg_solutions",
    ]
    assert data["left_leg_solutions"] == all_left
    assert data["best_right_leg_solutions"] == best_right


def test_solve_leg_ik_chains_best_solutions(pose_file, tmp_path):
    path, _, _ = pose_file
    result_path = tmp_path / "result_cs.yaml"
    seen = []

    def inverse(pose):
        seen.append(list(pose))
        offset = 0.01 * len(seen)
        base = LEFT_LEG_INITIAL_Q if pose[3] < 0.9 else RIGHT_LEG_INITIAL_Q
        near = [q + offset for q in base]
        far = [q + 1.5 for q in base]
        return far + near

    result = solve_leg_ik(path, result_path, LINK1_KEY, LINK4_KEY, inverse, 6)
    assert isinstance(result, LegIKResult)
    assert result.success
    assert len(result.best_left_solutions) == 2
    assert len(result.all_right_solutions[0]) == 2
    assert len(seen) == 4
    saved = yaml.safe_load(result_path.read_text())
    assert np.allclose(saved["best_left_leg_solutions"], result.best_left_solutions)
    assert np.allclose(saved["best_right_leg_solutions"], result.best_right_solutions)


def test_solve_leg_ik_missing_file(tmp_path):
    result = solve_leg_ik(
        tmp_path / "absent.yaml", tmp_path / "out.yaml", LINK1_KEY, LINK4_KEY, lambda p: [], 6
    )
    assert not result.success
    assert result.message == "Failed to load ee_pose from YAML file."
    assert not (tmp_path / "out.yaml").exists()


def test_solve_leg_ik_missing_transform_name(pose_file, tmp_path):
    path, _, _ = pose_file
    result = solve_leg_ik(path, tmp_path / "out.yaml", LINK1_KEY, "unknown", lambda p: [], 6)
    assert not result.success