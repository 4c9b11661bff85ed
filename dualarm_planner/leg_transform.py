"""Leg flange transforms along an interpolated floating-base trajectory."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from dualarm_planner.geometry import (
    ConfigError,
    interpolate_floating_base_poses,
    load_yaml,
    parse_transform_matrix,
)

logger = logging.getLogger(__name__)

POINTS_PER_STAGE = 250
TOTAL_POINTS = 1000
LINK1_KEY = "tf_mat_link1_0_flan1"
LINK4_KEY = "tf_mat_link4_0_flan4"


class _FlowList(list):
    """A list written in YAML flow style."""


class _Dumper(yaml.SafeDumper):
    pass


def _represent_flow(dumper: yaml.SafeDumper, data: _FlowList) -> yaml.Node:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)


_Dumper.add_representer(_FlowList, _represent_flow)


def _read_base(document: Any, key: str) -> list[float]:
    if not isinstance(document, Mapping):
        raise ConfigError(f"Missing {key}.")
    values = document.get(key)
    try:
        return [float(values[i]) for i in range(7)]
    except (IndexError, TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must hold 7 numbers") from exc


def _require_mapping(document: Any, filename: str | Path) -> Mapping[str, Any]:
    if not isinstance(document, Mapping):
        raise ConfigError(f"YAML file {filename} does not hold a mapping.")
    return document


def _pose_node(transform: np.ndarray) -> dict[str, Any]:
    return {
        "target_pose": {
            "position": _FlowList(float(v) for v in transform[:3, 3]),
            "orientation": [_FlowList(float(v) for v in row) for row in transform[:3, :3]],
        }
    }


def save_leg_transforms(
    filename: str | Path,
    link1_transforms: Sequence[np.ndarray],
    link4_transforms: Sequence[np.ndarray],
) -> None:
    """Write per-step flange transforms of both legs to a YAML file."""
    if len(link1_transforms) != len(link4_transforms):
        raise ValueError("both legs must have the same number of transforms")
    root = {
        f"step_{step}": {LINK1_KEY: _pose_node(tf1), LINK4_KEY: _pose_node(tf4)}
        for step, (tf1, tf4) in enumerate(zip(link1_transforms, link4_transforms))
    }
    with open(filename, "w", encoding="utf-8") as handle:
        yaml.dump(root, handle, Dumper=_Dumper, sort_keys=False, default_flow_style=False)
    logger.info("Saved all transformations to %s", filename)


def compute_leg_transforms(
    init_floating_base_file: str | Path,
    gold_floating_base_file: str | Path,
    tf_using_file: str | Path,
    output_file: str | Path,
) -> tuple[list[np.ndarray], list[np.ndarray]]:
    """Compute the flange poses of both legs in their link frames and save them.

    Returns the lists of link1_0->flan1 and link4_0->flan4 transforms.
    """
    init_doc = load_yaml(init_floating_base_file)
    gold_doc = load_yaml(gold_floating_base_file)
    tf_doc = _require_mapping(load_yaml(tf_using_file), tf_using_file)

    init_base = _read_base(init_doc, "init_floating_base")
    gold_base = _read_base(gold_doc, "gold_floating_base")
    poses = interpolate_floating_base_poses(init_base, gold_base, POINTS_PER_STAGE)[:TOTAL_POINTS]

    world_flan1 = parse_transform_matrix(tf_doc.get("tf_mat_world_flan1"))
    world_flan4 = parse_transform_matrix(tf_doc.get("tf_mat_world_flan4"))
    base_link1_inv = np.linalg.inv(parse_transform_matrix(tf_doc.get("tf_mat_base_link1_0")))
    base_link4_inv = np.linalg.inv(parse_transform_matrix(tf_doc.get("tf_mat_base_link4_0")))

    link1_transforms: list[np.ndarray] = []
    link4_transforms: list[np.ndarray] = []
    for pose in poses:
        pose_inv = np.linalg.inv(pose)
        link1_transforms.append(base_link1_inv @ (pose_inv @ world_flan1))
        link4_transforms.append(base_link4_inv @ (pose_inv @ world_flan4))

    save_leg_transforms(output_file, link1_transforms, link4_transforms)
    return link1_transforms, link4_transforms


def main(argv: Sequence[str] | None = None) -> int:
    """Compute leg transforms from the config files of a planning package directory."""
    parser = argparse.ArgumentParser(description="Compute leg flange transforms.")
    parser.add_argument("package_path", nargs="?", default=".", help="planning package directory")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    config = Path(args.package_path) / "config"
    try:
        compute_leg_transforms(
            config / "ik_urdf_double_arm_float.yaml",
            config / "planned_trajectory.yaml",
            config / "tf_using.yaml",
            config / "leg_ik_cs.yaml",
        )
    except (ConfigError, OSError, ValueError) as exc:
        logger.error("Failed to compute leg transforms! %s", exc)
        return 1
    logger.info("Leg transform computation completed successfully!")
    return 0