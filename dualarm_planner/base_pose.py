"""World pose of the robot base derived from a grounded branch's flange pose."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from dualarm_planner.geometry import (
    ConfigError,
    load_yaml,
    parse_transform_matrix,
    quaternion_slerp,
    rotation_matrix_to_quaternion,
)


@dataclass(frozen=True)
class Pose:
    """A position (x, y, z) and a unit orientation quaternion (x, y, z, w)."""

    position: tuple[float, float, float]
    orientation: tuple[float, float, float, float]


@dataclass(frozen=True)
class StaticTransforms:
    """Fixed world and base transforms of the two grounded branches."""

    world_flan1: np.ndarray
    world_flan4: np.ndarray
    base_link1_0: np.ndarray
    base_link4_0: np.ndarray


def load_static_transforms(tf_using_file: str | Path) -> StaticTransforms:
    """Read the four static transforms from a tf_using YAML file."""
    document = load_yaml(tf_using_file)
    if not isinstance(document, Mapping):
        raise ConfigError(f"YAML file {tf_using_file} does not hold a mapping.")
    return StaticTransforms(
        world_flan1=parse_transform_matrix(document.get("tf_mat_world_flan1")),
        world_flan4=parse_transform_matrix(document.get("tf_mat_world_flan4")),
        base_link1_0=parse_transform_matrix(document.get("tf_mat_base_link1_0")),
        base_link4_0=parse_transform_matrix(document.get("tf_mat_base_link4_0")),
    )


def _checked(ee_pose: Sequence[float], branch: str) -> np.ndarray:
    values = np.asarray(ee_pose, dtype=float)
    if values.shape != (12,):
        raise ValueError(f"Invalid FK result for {branch}")
    return values


def branch1_pose_to_matrix(ee_pose: Sequence[float]) -> np.ndarray:
    """Convert a row-major 3x4 pose ``[r00 r01 r02 tx r10 ... tz]`` to a 4x4 transform."""
    values = _checked(ee_pose, "branch1")
    transform = np.eye(4)
    transform[:3, :] = values.reshape(3, 4)
    return transform


def branch4_pose_to_matrix(ee_pose: Sequence[float]) -> np.ndarray:
    """Convert a pose laid out as nine rotation entries then three translations to a 4x4 transform."""
    values = _checked(ee_pose, "branch4")
    transform = np.eye(4)
    transform[:3, :3] = values[:9].reshape(3, 3)
    transform[:3, 3] = values[9:]
    return transform


def compute_base_link_pose(
    transforms: StaticTransforms,
    ee_pose_branch1: Sequence[float],
    ee_pose_branch4: Sequence[float],
) -> Pose:
    """Compute the world pose of base_link from the flange poses of branches 1 and 4.

    Both branch estimates are formed; the reported pose is the branch 1 estimate.
    """
    link1_flan1 = branch1_pose_to_matrix(ee_pose_branch1)
    link4_flan4 = branch4_pose_to_matrix(ee_pose_branch4)

    world_base1 = transforms.world_flan1 @ np.linalg.inv(transforms.base_link1_0 @ link1_flan1)
    world_base4 = transforms.world_flan4 @ np.linalg.inv(transforms.base_link4_0 @ link4_flan4)

    q1 = rotation_matrix_to_quaternion(world_base1[:3, :3])
    q4 = rotation_matrix_to_quaternion(world_base4[:3, :3])
    # the averaged estimate is formed but the reported pose follows branch 1
    quaternion_slerp(q1, q4, 0.5)
    q1 = q1 / np.linalg.norm(q1)

    position = world_base1[:3, 3]
    return Pose(
        position=(float(position[0]), float(position[1]), float(position[2])),
        orientation=(float(q1[0]), float(q1[1]), float(q1[2]), float(q1[3])),
    )