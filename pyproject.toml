[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dualarm_planner"
version = "0.1.0"
description = "Planning helpers for a dual-arm robot on a floating base: transform chains, staged base interpolation, leg IK solution selection and trajectory export to YAML."
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pyyaml",
]
keywords = [
    "robotics",
    "kinematics",
    "inverse-kinematics",
    "trajectory",
    "quaternion",
    "slerp",
    "yaml",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dualarm-leg-transform = "dualarm_planner.leg_transform:main"

[tool.hatch.build.targets.wheel]
packages = ["dualarm_planner"]

[tool.hatch.build.targets.sdist]
include = [
    "dualarm_planner",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
