"""Planning utilities for a dual-arm robot on a floating base: transforms, interpolation, leg IK selection and YAML export."""

__version__ = "0.1.0"

__all__ = [
    "actuator_defs",
    "base_pose",
    "geometry",
    "ik_limits",
    "leg_ik",
    "leg_transform",
    "signal",
    "trajectory",
]