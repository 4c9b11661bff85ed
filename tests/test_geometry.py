import math

import numpy as np
import pytest

from dualarm_planner.geometry import (
    ConfigError,
    interpolate_floating_base_poses,
    load_yaml,
    make_transform,
    parse_transform_matrix,
    quaternion_slerp,
    quaternion_to_rotation_matrix,
    rotation_matrix_to_quaternion,
)


def _random_unit_quaternions(count, seed=7):
    rng = np.random.default_rng(seed)
    for _ in range(count):
        q = rng.normal(size=4)
        yield q / np.linalg.norm(q)


def test_identity_quaternion_gives_identity_matrix():
    assert np.allclose(quaternion_to_rotation_matrix(0.0, 0.0, 0.0, 1.0), np.eye(3))


def test_rotation_matrix_is_orthonormal():
    for q in _random_unit_quaternions(20):
        r = quaternion_to_rotation_matrix(*q)
        assert np.allclose(r @ r.T, np.eye(3))
        assert math.isclose(np.linalg.det(r), 1.0, rel_tol=1e-9)


def test_quaternion_matrix_round_trip():
    for q in _random_unit_quaternions(50, seed=3):
        back = rotation_matrix_to_quaternion(quaternion_to_rotation_matrix(*q))
        assert np.allclose(back, q) or np.allclose(back, -q)


def test_rotation_matrix_to_quaternion_rejects_bad_shape():
    with pytest.raises(ValueError):
        rotation_matrix_to_quaternion(np.eye(4))


def test_slerp_endpoints():
    q0, q1 = list(_random_unit_quaternions(2, seed=11))
    assert np.allclose(quaternion_slerp(q0, q1, 0.0), q0)
    end = quaternion_slerp(q0, q1, 1.0)
    assert np.allclose(end, q1) or np.allclose(end, -q1)


def test_slerp_stays_unit_and_same_input_is_fixed():
    q0, q1 = list(_random_unit_quaternions(2, seed=5))
    for t in np.linspace(0.0, 1.0, 9):
        assert math.isclose(np.linalg.norm(quaternion_slerp(q0, q1, t)), 1.0, rel_tol=1e-9)
    assert np.allclose(quaternion_slerp(q0, q0, 0.5), q0)


def test_make_transform_places_blocks():
    rotation = quaternion_to_rotation_matrix(*next(_random_unit_quaternions(1)))
    tf = make_transform(rotation, [1.0, 2.0, 3.0])
    assert np.allclose(tf[:3, :3], rotation)
    assert np.allclose(tf[:3, 3], [1.0, 2.0, 3.0])
    assert np.allclose(tf[3], [0.0, 0.0, 0.0, 1.0])


def test_parse_transform_matrix():
    node = {
        "target_pose": {
            "position": [0.5, -0.25, 1.5],
            "orientation": [[0, -1, 0], [1, 0, 0], [0, 0, 1]],
        }
    }
    tf = parse_transform_matrix(node)
    assert np.allclose(tf[:3, 3], [0.5, -0.25, 1.5])
    assert np.allclose(tf[:3, :3], [[0, -1, 0], [1, 0, 0], [0, 0, 1]])


@pytest.mark.parametrize(
    "node",
    [None, {}, {"target_pose": {"position": [1, 2]}}, {"target_pose": {"position": [1, 2, 3]}}],
)
def test_parse_transform_matrix_errors(node):
    with pytest.raises(ConfigError):
        parse_transform_matrix(node)


def test_load_yaml_reads_document(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text("values: [1, 2, 3]\n", encoding="utf-8")
    assert load_yaml(path) == {"values": [1, 2, 3]}


def test_load_yaml_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_yaml(tmp_path / "absent.yaml")


def test_load_yaml_malformed(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml(path)


def _unit(q):
    q = np.asarray(q, dtype=float)
    return q / np.linalg.norm(q)


def test_floating_base_interpolation_stages():
    q_init = _unit([0.1, 0.2, 0.3, 0.9])
    q_goal = _unit([-0.2, 0.4, 0.1, 0.8])
    init = [1.0, 2.0, 3.0, *q_init]
    goal = [4.0, 5.0, 6.0, *q_goal]
    n = 10
    poses = interpolate_floating_base_poses(init, goal, n)
    assert len(poses) == 4 * n

    assert np.allclose(poses[0][:3, 3], [1.0, 2.0, 3.0])
    assert np.allclose(poses[0][:3, :3], quaternion_to_rotation_matrix(*q_init))
    # end of z stage: z at goal, x and y unchanged
    assert np.allclose(poses[n - 1][:3, 3], [1.0, 2.0, 6.0])
    # end of x stage
    assert np.allclose(poses[2 * n - 1][:3, 3], [4.0, 2.0, 6.0])
    # end of y stage, rotation still initial
    assert np.allclose(poses[3 * n - 1][:3, 3], [4.0, 5.0, 6.0])
    assert np.allclose(poses[3 * n - 1][:3, :3], quaternion_to_rotation_matrix(*q_init))
    # final pose equals goal
    assert np.allclose(poses[-1][:3, 3], [4.0, 5.0, 6.0])
    assert np.allclose(poses[-1][:3, :3], quaternion_to_rotation_matrix(*q_goal))


def test_floating_base_single_point_per_stage():
    init = [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0]
    goal = [1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 1.0]
    poses = interpolate_floating_base_poses(init, goal, 1)
    assert len(poses) == 4
    assert np.allclose(poses[0][:3, 3], [0.0, 0.0, 1.0])
    assert np.allclose(poses[-1][:3, 3], [1.0, 1.0, 1.0])


def test_floating_base_bad_length():
    with pytest.raises(ValueError):
        interpolate_floating_base_poses([0.0] * 6, [0.0] * 7, 5)