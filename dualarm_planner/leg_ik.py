"""Inverse kinematics of the two grounded legs along a sequence of flange poses."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from dualarm_planner.geometry import ConfigError, load_yaml

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi
LEFT_LEG_INITIAL_Q = (1.597727, 0.295055, 2.156446, 3.101495, -0.494894, -0.016370)
RIGHT_LEG_INITIAL_Q = (-1.597727, 0.295055, 2.156446, -0.040097, 0.494959, 0.016244)

InverseSolver = Callable[[Sequence[float]], Sequence[float]]


@dataclass
class LegIKResult:
    """Outcome of solving both legs over every step of a pose file."""

    success: bool = False
    message: str = ""
    all_left_solutions: list[list[list[float]]] = field(default_factory=list)
    best_left_solutions: list[list[float]] = field(default_factory=list)
    all_right_solutions: list[list[list[float]]] = field(default_factory=list)
    best_right_solutions: list[list[float]] = field(default_factory=list)


class _FlowList(list):
    """A list written in YAML flow style."""


class _Dumper(yaml.SafeDumper):
    pass


def _represent_flow(dumper: yaml.SafeDumper, data: _FlowList) -> yaml.Node:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)


_Dumper.add_representer(_FlowList, _represent_flow)


def load_ee_poses_from_yaml(filename: str | Path, tf_name: str) -> list[list[float]]:
    """Read the ``tf_name`` pose of every step as a row-major 3x4 list of 12 values.

    Steps that lack ``tf_name`` are reported and skipped.
    """
    document = load_yaml(filename)
    if not isinstance(document, Mapping):
        raise ConfigError(f"YAML file {filename} does not hold a mapping.")

    poses: list[list[float]] = []
    for step_name, step in document.items():
        node = step.get(tf_name) if isinstance(step, Mapping) else None
        if not node:
            logger.error("Error: %s not found in step %s", tf_name, step_name)
            continue
        try:
            pose = node["target_pose"]
            position = [float(pose["position"][i]) for i in range(3)]
            rotation = [[float(pose["orientation"][r][c]) for c in range(3)] for r in range(3)]
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid pose for {tf_name} in step {step_name}: {exc}") from exc
        poses.append([value for row, t in zip(rotation, position) for value in (*row, t)])
    return poses


def pose_to_ik_input(ee_pose: Sequence[float]) -> tuple[list[float], list[float]]:
    """Split a pose into a translation (3) and a row-major rotation (9).

    Accepts ``[x, y, z, qw, qx, qy, qz]`` or a row-major 3x4 matrix of 12 values.
    """
    values = [float(v) for v in ee_pose]
    if len(values) == 7:
        x, y, z, qw, qx, qy, qz = values
        norm = math.sqrt(qx * qx + qy * qy + qz * qz + qw * qw)
        if norm == 0.0:
            raise ValueError("quaternion must not be zero")
        qw, qx, qy, qz = qw / norm, qx / norm, qy / norm, qz / norm
        rotation = [
            1 - 2 * qy * qy - 2 * qz * qz,
            2 * qx * qy - 2 * qz * qw,
            2 * qx * qz + 2 * qy * qw,
            2 * qx * qy + 2 * qz * qw,
            1 - 2 * qx * qx - 2 * qz * qz,
            2 * qy * qz - 2 * qx * qw,
            2 * qx * qz - 2 * qy * qw,
            2 * qy * qz + 2 * qx * qw,
            1 - 2 * qx * qx - 2 * qy * qy,
        ]
        return [x, y, z], rotation
    if len(values) == 12:
        rows = [values[r * 4 : r * 4 + 4] for r in range(3)]
        return [row[3] for row in rows], [v for row in rows for v in row[:3]]
    raise ValueError("ee_pose size must be 7 or 12.")


def normalize_angle(angle: float) -> float:
    """Shift an angle by a full turn and wrap it with ``fmod`` into ``[0, 2*pi)``."""
    return math.fmod(angle + TWO_PI, TWO_PI)


def calculate_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between ``a`` and the first ``len(a)`` values of ``b``."""
    if len(b) < len(a):
        raise ValueError("second vector is shorter than the first")
    return math.sqrt(sum((float(x) - float(y)) ** 2 for x, y in zip(a, b)))


def find_all_solutions(
    ik_results: Sequence[float], initial_q: Sequence[float], num_joints: int
) -> tuple[list[list[float]], list[float]]:
    """Split flat IK output into solutions and pick the one closest to ``initial_q``.

    A fourth joint within one radian of +/-pi is wrapped with :func:`normalize_angle`.
    Trailing values that do not make a whole solution are ignored. With no
    solutions, the closest solution is an empty list.
    """
    if num_joints <= 0:
        raise ValueError("num_joints must be positive")
    values = [float(v) for v in ik_results]
    solutions: list[list[float]] = []
    closest: list[float] = []
    min_distance = math.inf
    for start in range(0, len(values) - num_joints + 1, num_joints):
        solution = values[start : start + num_joints]
        if num_joints > 3 and abs(abs(solution[3]) - math.pi) < 1.0:
            solution[3] = normalize_angle(solution[3])
        solutions.append(solution)
        distance = calculate_distance(initial_q, solution)
        if distance < min_distance:
            min_distance = distance
            closest = solution
    return solutions, closest


def save_leg_ik_result(
    filename: str | Path,
    all_left: Sequence[Sequence[Sequence[float]]],
    best_left: Sequence[Sequence[float]],
    all_right: Sequence[Sequence[Sequence[float]]],
    best_right: Sequence[Sequence[float]],
) -> None:
    """Write every solution and the best solution of each step for both legs."""

    def nested(steps: Sequence[Sequence[Sequence[float]]]) -> list[list[_FlowList]]:
        return [[_FlowList(float(v) for v in sol) for sol in step] for step in steps]

    def flat(steps: Sequence[Sequence[float]]) -> list[_FlowList]:
        return [_FlowList(float(v) for v in sol) for sol in steps]

    root: dict[str, Any] = {
        "left_leg_solutions": nested(all_left),
        "best_left_leg_solutions": flat(best_left),
        "right_leg_solutions": nested(all_right),
        "best_right_leg_solutions": flat(best_right),
    }
    with open(filename, "w", encoding="utf-8") as handle:
        yaml.dump(root, handle, Dumper=_Dumper, sort_keys=False, default_flow_style=False)
    logger.info("IK results saved to %s", filename)


def solve_leg_ik(
    yaml_file: str | Path,
    result_path: str | Path,
    left_tf_name: str,
    right_tf_name: str,
    inverse: InverseSolver,
    num_joints: int = 6,
) -> LegIKResult:
    """Solve both legs for every step, each seeded with the previous best solution.

    ``inverse`` maps a 12-value pose to a flat list of joint solutions.
    The results are saved to ``result_path``.
    """
    try:
        poses_left = load_ee_poses_from_yaml(yaml_file, left_tf_name)
        poses_right = load_ee_poses_from_yaml(yaml_file, right_tf_name)
    except ConfigError as exc:
        logger.error("Error loading YAML file: %s", exc)
        poses_left, poses_right = [], []

    if not poses_left or not poses_right:
        return LegIKResult(message="Failed to load ee_pose from YAML file.")
    if len(poses_left) != len(poses_right):
        return LegIKResult(message="Left and right leg pose counts differ.")

    left_q: Sequence[float] = list(LEFT_LEG_INITIAL_Q)
    right_q: Sequence[float] = list(RIGHT_LEG_INITIAL_Q)
    result = LegIKResult()
    for pose_left, pose_right in zip(poses_left, poses_right):
        left_all, left_best = find_all_solutions(inverse(pose_left), left_q, num_joints)
        right_all, right_best = find_all_solutions(inverse(pose_right), right_q, num_joints)
        result.all_left_solutions.append(left_all)
        result.best_left_solutions.append(left_best)
        result.all_right_solutions.append(right_all)
        result.best_right_solutions.append(right_best)
        left_q, right_q = left_best, right_best

    save_leg_ik_result(
        result_path,
        result.all_left_solutions,
        result.best_left_solutions,
        result.all_right_solutions,
        result.best_right_solutions,
    )
    result.success = True
    result.message = "Leg IK computation completed successfully"
    return result