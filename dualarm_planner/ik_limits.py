"""Joint and floating-base limits and the configuration files of the dual-arm IK solver."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dualarm_planner.geometry import ConfigError, load_yaml

_ARM_JOINTS = 6
_BASE_SIZE = 7


def _quat_mul(a: Sequence[float], b: Sequence[float]) -> tuple[float, float, float, float]:
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return (
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by + ay * bw + az * bx - ax * bz,
        aw * bz + az * bw + ax * by - ay * bx,
        aw * bw - ax * bx - ay * by - az * bz,
    )


def _euler_xyz_to_quaternion(roll: float, pitch: float, yaw: float) -> tuple[float, float, float, float]:
    qx = (math.sin(roll / 2), 0.0, 0.0, math.cos(roll / 2))
    qy = (0.0, math.sin(pitch / 2), 0.0, math.cos(pitch / 2))
    qz = (0.0, 0.0, math.sin(yaw / 2), math.cos(yaw / 2))
    return _quat_mul(_quat_mul(qx, qy), qz)


def _normalize_quaternion_in_place(values: list[float]) -> None:
    norm = math.sqrt(sum(v * v for v in values[3:7]))
    if norm > 0.0:
        values[3:7] = [v / norm for v in values[3:7]]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _floats(values: Any, key: str, count: int) -> list[float]:
    try:
        return [float(values[i]) for i in range(count)]
    except (IndexError, KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must hold {count} numbers") from exc


@dataclass(frozen=True)
class JointLimits:
    """Bounds on the twelve arm joints and on the floating base ``[x, y, z, qx, qy, qz, qw]``."""

    angle_min: tuple[float, ...]
    angle_max: tuple[float, ...]
    floating_min: tuple[float, ...]
    floating_max: tuple[float, ...]

    def clamp_joint_angles(self, angles: Sequence[float]) -> list[float]:
        """Clamp each arm joint angle to its limits."""
        if len(angles) != len(self.angle_min):
            raise ValueError(f"expected {len(self.angle_min)} joint angles")
        return [_clamp(float(a), lo, hi) for a, lo, hi in zip(angles, self.angle_min, self.angle_max)]

    def clamp_floating_base(self, base: Sequence[float]) -> list[float]:
        """Clamp each base component to its limits, then renormalise the quaternion."""
        if len(base) != _BASE_SIZE:
            raise ValueError("floating base must hold 7 values")
        result = [_clamp(float(v), lo, hi) for v, lo, hi in zip(base, self.floating_min, self.floating_max)]
        _normalize_quaternion_in_place(result)
        return result


def load_joint_limits(path: str | Path) -> JointLimits:
    """Read arm joint limits (Joint2_1..6, Joint3_1..6) and floating-joint limits.

    Limits that the file leaves out are unbounded. Floating rotation limits are
    given as XYZ Euler angles in degrees and stored as quaternions.
    """
    document = load_yaml(path)
    if not isinstance(document, Mapping):
        raise ConfigError(f"YAML file {path} does not hold a mapping.")

    angle_min = [-math.inf] * (2 * _ARM_JOINTS)
    angle_max = [math.inf] * (2 * _ARM_JOINTS)
    limits = document.get("joint_limits") or {}
    for offset, branch in ((0, 2), (_ARM_JOINTS, 3)):
        for i in range(_ARM_JOINTS):
            name = f"Joint{branch}_{i + 1}"
            entry = limits.get(name) if isinstance(limits, Mapping) else None
            angle = entry.get("angle") if isinstance(entry, Mapping) else None
            if angle and len(angle) >= 2:
                angle_min[offset + i], angle_max[offset + i] = _floats(angle, f"{name}.angle", 2)

    floating_min = [-math.inf] * _BASE_SIZE
    floating_max = [math.inf] * _BASE_SIZE
    floating = document.get("floating_joint")
    if isinstance(floating, Mapping):
        position = floating.get("position")
        if isinstance(position, Mapping):
            floating_min[:3] = _floats(position.get("min"), "floating_joint.position.min", 3)
            floating_max[:3] = _floats(position.get("max"), "floating_joint.position.max", 3)
        rotation = floating.get("rotation")
        if isinstance(rotation, Mapping):
            euler_min = [math.radians(v) for v in _floats(rotation.get("euler_min"), "euler_min", 3)]
            euler_max = [math.radians(v) for v in _floats(rotation.get("euler_max"), "euler_max", 3)]
            floating_min[3:] = _euler_xyz_to_quaternion(*euler_min)
            floating_max[3:] = _euler_xyz_to_quaternion(*euler_max)

    return JointLimits(
        angle_min=tuple(angle_min),
        angle_max=tuple(angle_max),
        floating_min=tuple(floating_min),
        floating_max=tuple(floating_max),
    )


def load_initial_configuration(path: str | Path, nq: int) -> list[float]:
    """Read the initial configuration: 7 floating-base values then ``nq - 7`` joint angles.

    The base quaternion is normalised.
    """
    document = load_yaml(path)
    if not isinstance(document, Mapping):
        raise ConfigError(f"YAML file {path} does not hold a mapping.")
    if nq < _BASE_SIZE:
        raise ValueError("nq must be at least 7")
    q = _floats(document.get("init_floating_base"), "init_floating_base", _BASE_SIZE)
    q += _floats(document.get("init_joint_angles"), "init_joint_angles", nq - _BASE_SIZE)
    _normalize_quaternion_in_place(q)
    return q


def save_ik_result(filename: str | Path, q: Sequence[float], nq: int) -> None:
    """Write the solved configuration as ``gold_floating_base`` and ``gold_joint_angles``."""
    if len(q) != nq:
        raise ValueError("qIk size does not match model.nq!")
    base = ", ".join(f"{float(v):g}" for v in q[:_BASE_SIZE])
    joints = ", ".join(f"{float(v):g}" for v in q[_BASE_SIZE:])
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(f"gold_floating_base: [{base}]\n")
        handle.write(f"gold_joint_angles: [{joints}]\n")