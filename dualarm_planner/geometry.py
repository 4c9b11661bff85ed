"""Rigid-body helpers: quaternions, homogeneous transforms and YAML loading."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import numpy as np
import yaml

_EPSILON = float(np.finfo(float).eps)


class ConfigError(Exception):
    """Raised when a configuration file is missing, unreadable or malformed."""


def load_yaml(filename: str | Path) -> Any:
    """Load a YAML document from ``filename``."""
    try:
        with open(filename, encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load YAML file: {filename}. Error: {exc}") from exc


def quaternion_to_rotation_matrix(x: float, y: float, z: float, w: float) -> np.ndarray:
    """Return the 3x3 rotation matrix of the quaternion (x, y, z, w)."""
    tx, ty, tz = 2.0 * x, 2.0 * y, 2.0 * z
    twx, twy, twz = tx * w, ty * w, tz * w
    txx, txy, txz = tx * x, ty * x, tz * x
    tyy, tyz, tzz = ty * y, tz * y, tz * z
    return np.array(
        [
            [1.0 - (tyy + tzz), txy - twz, txz + twy],
            [txy + twz, 1.0 - (txx + tzz), tyz - twx],
            [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
        ]
    )


def rotation_matrix_to_quaternion(rotation: Any) -> np.ndarray:
    """Return the quaternion (x, y, z, w) of a 3x3 rotation matrix."""
    m = np.asarray(rotation, dtype=float)
    if m.shape != (3, 3):
        raise ValueError("rotation must be a 3x3 matrix")
    diagonal_sum = float(m[0, 0] + m[1, 1] + m[2, 2])
    if diagonal_sum > 0.0:
        t = math.sqrt(diagonal_sum + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return np.array(
            [
                (m[2, 1] - m[1, 2]) * t,
                (m[0, 2] - m[2, 0]) * t,
                (m[1, 0] - m[0, 1]) * t,
                w,
            ]
        )
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    q = np.zeros(4)
    q[i] = 0.5 * t
    t = 0.5 / t
    q[3] = (m[k, j] - m[j, k]) * t
    q[j] = (m[j, i] + m[i, j]) * t
    q[k] = (m[k, i] + m[i, k]) * t
    return q


def quaternion_slerp(q0: Sequence[float], q1: Sequence[float], t: float) -> np.ndarray:
    """Spherically interpolate between quaternions (x, y, z, w), taking the short path."""
    a = np.asarray(q0, dtype=float)
    b = np.asarray(q1, dtype=float)
    d = float(np.dot(a, b))
    abs_d = abs(d)
    if abs_d >= 1.0 - _EPSILON:
        scale0 = 1.0 - t
        scale1 = t
    else:
        theta = math.acos(abs_d)
        sin_theta = math.sin(theta)
        scale0 = math.sin((1.0 - t) * theta) / sin_theta
        scale1 = math.sin(t * theta) / sin_theta
    if d < 0.0:
        scale1 = -scale1
    return scale0 * a + scale1 * b


def make_transform(rotation: Any, position: Sequence[float]) -> np.ndarray:
    """Assemble a 4x4 homogeneous transform from a rotation and a translation."""
    transform = np.eye(4)
    transform[:3, :3] = np.asarray(rotation, dtype=float)
    transform[:3, 3] = np.asarray(position, dtype=float)
    return transform


def parse_transform_matrix(node: Mapping[str, Any] | None) -> np.ndarray:
    """Build a 4x4 transform from a node holding ``target_pose`` position and orientation."""
    if not node:
        raise ConfigError("Invalid transform node.")
    try:
        pose = node["target_pose"]
        position = [float(pose["position"][i]) for i in range(3)]
        rotation = [[float(pose["orientation"][r][c]) for c in range(3)] for r in range(3)]
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid transform node: {exc}") from exc
    return make_transform(rotation, position)


def interpolate_floating_base_poses(
    init_base: Sequence[float], goal_base: Sequence[float], points_per_stage: int
) -> list[np.ndarray]:
    """Interpolate the base pose in four stages: z, then x, then y, then rotation.

    Each base is ``[x, y, z, qx, qy, qz, qw]``; each stage yields ``points_per_stage`` poses.
    """
    init = np.asarray(init_base, dtype=float)
    goal = np.asarray(goal_base, dtype=float)
    if init.shape != (7,) or goal.shape != (7,):
        raise ValueError("floating base must hold 7 values: x, y, z, qx, qy, qz, qw")

    pos_init, pos_goal = init[:3], goal[:3]
    q_init = rotation_matrix_to_quaternion(quaternion_to_rotation_matrix(*init[3:]))
    q_goal = rotation_matrix_to_quaternion(quaternion_to_rotation_matrix(*goal[3:]))

    pos_current = pos_init.copy()
    q_current = q_init
    poses: list[np.ndarray] = []
    for axis in (2, 0, 1, None):
        for i in range(points_per_stage):
            t = 1.0 if points_per_stage == 1 else i / (points_per_stage - 1)
            if axis is None:
                q_current = quaternion_slerp(q_init, q_goal, t)
            else:
                pos_current[axis] = (1.0 - t) * pos_init[axis] + t * pos_goal[axis]
            poses.append(make_transform(quaternion_to_rotation_matrix(*q_current), pos_current))
    return poses