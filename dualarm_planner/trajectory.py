"""Full-body trajectory assembly: joint angles of all four branches plus the floating base."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from dualarm_planner.geometry import (
    ConfigError,
    interpolate_floating_base_poses,
    load_yaml,
    rotation_matrix_to_quaternion,
)

logger = logging.getLogger(__name__)

_BRANCH_JOINTS = 6


@dataclass(frozen=True)
class JointLayout:
    """Positions of each branch's six joints within a full-body joint vector.

    ``joint1`` and ``joint4`` are the grounded legs, ``joint2`` and ``joint3`` the arms.
    """

    joint1: tuple[int, ...]
    joint2: tuple[int, ...]
    joint3: tuple[int, ...]
    joint4: tuple[int, ...]

    def __post_init__(self) -> None:
        for name in ("joint1", "joint2", "joint3", "joint4"):
            indices = tuple(int(i) for i in getattr(self, name))
            if len(indices) != _BRANCH_JOINTS:
                raise ValueError(f"{name} must list {_BRANCH_JOINTS} joint indices")
            object.__setattr__(self, name, indices)

    @property
    def _all_indices(self) -> tuple[int, ...]:
        return self.joint1 + self.joint2 + self.joint3 + self.joint4


class _FlowList(list):
    """A list written in YAML flow style."""


class _Dumper(yaml.SafeDumper):
    pass


def _represent_flow(dumper: yaml.SafeDumper, data: _FlowList) -> yaml.Node:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)


_Dumper.add_representer(_FlowList, _represent_flow)


def _require_mapping(document: Any, filename: str | Path) -> Mapping[str, Any]:
    if not isinstance(document, Mapping):
        raise ConfigError(f"YAML file {filename} does not hold a mapping.")
    return document


def _float_list(values: Any, key: str, minimum: int) -> list[float]:
    try:
        result = [float(v) for v in values]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a list of numbers") from exc
    if len(result) < minimum:
        raise ConfigError(f"{key} must hold at least {minimum} values")
    return result


def load_joint_angles(
    init_floating_base_file: str | Path,
    gold_floating_base_file: str | Path,
    result_cs_file: str | Path,
    layout: JointLayout,
    steps: int,
    joint_count: int,
) -> list[list[float]]:
    """Build ``steps`` frames of ``joint_count`` angles.

    Arm joints (``joint2`` then ``joint3``) are linearly interpolated from
    ``init_joint_angles`` to ``gold_joint_angles``; leg joints (``joint1`` and
    ``joint4``) are taken per frame from the best leg IK solutions.
    """
    if any(not 0 <= i < joint_count for i in layout._all_indices):
        raise ValueError("joint layout index out of range")
    joint_angles = [[0.0] * joint_count for _ in range(steps)]

    init_doc = _require_mapping(load_yaml(init_floating_base_file), init_floating_base_file)
    gold_doc = _require_mapping(load_yaml(gold_floating_base_file), gold_floating_base_file)

    if init_doc.get("init_joint_angles") and gold_doc.get("gold_joint_angles"):
        arm_indices = layout.joint2 + layout.joint3
        init_angles = _float_list(init_doc["init_joint_angles"], "init_joint_angles", len(arm_indices))
        gold_angles = _float_list(gold_doc["gold_joint_angles"], "gold_joint_angles", len(arm_indices))
        if steps < 2:
            raise ValueError("joint_angles size is too small for interpolation.")
        for joint_id, init_value, goal_value in zip(arm_indices, init_angles, gold_angles):
            for step, frame in enumerate(joint_angles):
                t = step / (steps - 1)
                frame[joint_id] = init_value + t * (goal_value - init_value)
    else:
        logger.error("joint angle file missing init_joint_angles or gold_joint_angles.")

    result = _require_mapping(load_yaml(result_cs_file), result_cs_file)
    left_solutions = result.get("best_left_leg_solutions")
    right_solutions = result.get("best_right_leg_solutions")
    if not left_solutions or not right_solutions:
        raise ConfigError("Missing best_left_leg_solutions or best_right_leg_solutions")
    if len(left_solutions) != steps or len(right_solutions) != steps:
        raise ConfigError("Mismatch in joint angle size and solution steps.")

    for step, (frame, left, right) in enumerate(zip(joint_angles, left_solutions, right_solutions)):
        left_angles = _float_list(left or [], "best_left_leg_solutions", 0)
        right_angles = _float_list(right or [], "best_right_leg_solutions", 0)
        if len(left_angles) != _BRANCH_JOINTS or len(right_angles) != _BRANCH_JOINTS:
            logger.error("Invalid angle vector size at step %d", step)
            continue
        for index, value in zip(layout.joint1, left_angles):
            frame[index] = value
        for index, value in zip(layout.joint4, right_angles):
            frame[index] = value

    logger.info("Loaded leg joint angles from %s", result_cs_file)
    return joint_angles


def _read_base(filename: str | Path, key: str) -> list[float]:
    document = _require_mapping(load_yaml(filename), filename)
    values = document.get(key)
    if values is None:
        raise ConfigError(f"Missing {key} in {filename}.")
    return _float_list(values, key, 7)[:7]


def interpolate_floating_base(
    init_floating_base_file: str | Path,
    gold_floating_base_file: str | Path,
    point_per_stage: int = 250,
) -> list[np.ndarray]:
    """Interpolate the base pose from the initial to the goal file, stage by stage."""
    init_base = _read_base(init_floating_base_file, "init_floating_base")
    gold_base = _read_base(gold_floating_base_file, "gold_floating_base")
    return interpolate_floating_base_poses(init_base, gold_base, point_per_stage)


def save_full_body_trajectory(
    output_file: str | Path,
    joint_angles: Sequence[Sequence[float]],
    floating_base_sequence: Sequence[np.ndarray],
) -> None:
    """Write joint angles and base poses ``[x, y, z, qx, qy, qz, qw]`` per frame to YAML."""
    if len(joint_angles) != len(floating_base_sequence):
        raise ValueError("Mismatched size between joint angles and base pose sequence")

    joint_seq = [_FlowList(float(v) for v in frame) for frame in joint_angles]
    base_seq = []
    for transform in floating_base_sequence:
        tf = np.asarray(transform, dtype=float)
        q = rotation_matrix_to_quaternion(tf[:3, :3])
        base_seq.append(_FlowList([*(float(v) for v in tf[:3, 3]), *(float(v) for v in q)]))

    root = {"joint_angle_sequence": joint_seq, "floating_base_sequence": base_seq}
    with open(output_file, "w", encoding="utf-8") as handle:
        yaml.dump(root, handle, Dumper=_Dumper, sort_keys=False, default_flow_style=False)
    logger.info("Saved full body trajectory to YAML: %s", output_file)