# dualarm_planner

Planning utilities for a dual-arm robot that stands on a floating base. The
package reads the YAML files that describe the robot's start pose, goal pose
and fixed frame transforms, and writes the intermediate files a controller
works from: per-step flange transforms of each leg, the chosen leg IK
solutions, and a full-body trajectory.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Modules

- `dualarm_planner.geometry`
  - `load_yaml(filename)` loads a YAML document and raises `ConfigError` if the
    file cannot be read or parsed.
  - `quaternion_to_rotation_matrix(x, y, z, w)` and
    `rotation_matrix_to_quaternion(rotation)` convert between quaternions
    (ordered x, y, z, w) and 3x3 rotation matrices.
  - `quaternion_slerp(q0, q1, t)` interpolates along the shorter arc.
  - `make_transform(rotation, position)` builds a 4x4 homogeneous transform;
    `parse_transform_matrix(node)` builds one from a mapping holding
    `target_pose` with `position` and a 3x3 `orientation`.
  - `interpolate_floating_base_poses(init_base, goal_base, points_per_stage)`
    moves a base `[x, y, z, qx, qy, qz, qw]` in four stages (Z, then X, then
    Y, then rotation by slerp), yielding `points_per_stage` poses per stage.
- `dualarm_planner.leg_transform`
  - `compute_leg_transforms(init_floating_base_file, gold_floating_base_file,
    tf_using_file, output_file)` reads `init_floating_base` and
    `gold_floating_base`, interpolates 1000 base poses (250 per stage), and for
    each one expresses the world flange transforms `tf_mat_world_flan1` and
    `tf_mat_world_flan4` in the leg base links `tf_mat_base_link1_0` and
    `tf_mat_base_link4_0`. It saves the result and returns the two transform
    lists.
  - `save_leg_transforms(filename, link1_transforms, link4_transforms)` writes
    them as `step_<n>` entries holding `tf_mat_link1_0_flan1` and
    `tf_mat_link4_0_flan4`.
  - `main(argv=None)` is the command described below.
- `dualarm_planner.base_pose`
  - `load_static_transforms(tf_using_file)` returns a `StaticTransforms` with
    the four fixed transforms.
  - `branch1_pose_to_matrix(ee_pose)` and `branch4_pose_to_matrix(ee_pose)`
    turn 12-value flange poses (two different layouts) into 4x4 transforms.
  - `compute_base_link_pose(transforms, ee_pose_branch1, ee_pose_branch4)`
    forms a world pose estimate of the base link from each branch and returns
    the branch 1 estimate as a `Pose` (position and unit quaternion).
- `dualarm_planner.trajectory`
  - `JointLayout` names the six joint indices of each of the four branches in
    a full-body joint vector.
  - `load_joint_angles(init_floating_base_file, gold_floating_base_file,
    result_cs_file, layout, steps, joint_count)` linearly interpolates the arm
    joints from `init_joint_angles` to `gold_joint_angles` and fills the leg
    joints from `best_left_leg_solutions` and `best_right_leg_solutions`.
  - `interpolate_floating_base(init_floating_base_file,
    gold_floating_base_file, point_per_stage=250)` runs the staged base
    interpolation from files.
  - `save_full_body_trajectory(output_file, joint_angles,
    floating_base_sequence)` writes `joint_angle_sequence` and
    `floating_base_sequence` (`[x, y, z, qx, qy, qz, qw]` per frame).
- `dualarm_planner.ik_limits`
  - `load_joint_limits(path)` reads limits of `Joint2_1`..`Joint2_6` and
    `Joint3_1`..`Joint3_6` and of the `floating_joint` (position bounds and
    XYZ Euler rotation bounds in degrees, stored as quaternions). Limits left
    out of the file are unbounded.
  - `JointLimits.clamp_joint_angles(angles)` and
    `JointLimits.clamp_floating_base(base)` clamp to those limits; the latter
    renormalises the quaternion.
  - `load_initial_configuration(path, nq)` reads `init_floating_base` and
    `init_joint_angles` into one vector of length `nq`.
  - `save_ik_result(filename, q, nq)` writes `gold_floating_base` and
    `gold_joint_angles`.
- `dualarm_planner.leg_ik`
  - `load_ee_poses_from_yaml(filename, tf_name)` reads one 12-value pose per
    step, skipping steps that lack `tf_name`.
  - `pose_to_ik_input(ee_pose)` splits a 7-value (position plus w-first
    quaternion) or 12-value pose into translation and rotation.
  - `normalize_angle(angle)` and `calculate_distance(a, b)` are the helpers
    used by `find_all_solutions(ik_results, initial_q, num_joints)`, which
    splits flat IK output into solutions, wraps a fourth joint near ±π, and
    picks the solution closest to `initial_q`.
  - `solve_leg_ik(yaml_file, result_path, left_tf_name, right_tf_name,
    inverse, num_joints=6)` solves both legs step by step, seeding each step
    with the previous best solution, saves the result with
    `save_leg_ik_result` and returns a `LegIKResult`.
- `dualarm_planner.signal`: `Signal` connects callables
  (`connect` returns a connection id), removes them with `disconnect`,
  `disconnect_many` and `disconnect_all`, and calls them all in connection
  order with `emit`.
- `dualarm_planner.actuator_defs`: `IntEnum` types for actuator connection and
  online status, chart channels and switches, homing and control modes,
  operation flags, attributes (`ActuatorAttribute`), protocol commands
  (`Directive`) and error codes (`ErrorCode`), plus `decode_error_flags(code)`
  which lists the single-bit errors set in an error word.

## Example

```python
from dualarm_planner.leg_transform import compute_leg_transforms

link1, link4 = compute_leg_transforms(
    "config/ik_urdf_double_arm_float.yaml",
    "config/planned_trajectory.yaml",
    "config/tf_using.yaml",
    "config/leg_ik_cs.yaml",
)
```

## Command line

```
dualarm-leg-transform [package_path]
```

reads `ik_urdf_double_arm_float.yaml`, `planned_trajectory.yaml` and
`tf_using.yaml` from `<package_path>/config` (default: the current directory)
and writes `<package_path>/config/leg_ik_cs.yaml`. It exits with status 1 if a
file is missing or malformed. `dualarm-leg-transform --help` prints the usage.

## What the package does not do

- It has no forward or inverse kinematics solver of its own: `solve_leg_ik`
  takes the inverse-kinematics function as an argument, and
  `compute_base_link_pose` takes flange poses already computed by the caller.
- It does not solve the dual-arm, floating-base IK problem; `ik_limits` only
  reads and applies its limits and configuration files.
- It does not talk to actuators or grippers; `actuator_defs` and `signal` hold
  only the codes and the callback mechanism.
- It runs no service or node; the only command is `dualarm-leg-transform`.