"""Shared fixtures for lockgraph tests."""

from __future__ import annotations

import pathlib

import pytest

PODFILE_LOCK = """\
PODS:
  - Alamofire (5.8.1)
  - Firebase/Analytics (10.18.0):
    - Firebase/Core
    - FirebaseAnalytics (~> 10.18.0)
  - Firebase/Core (10.18.0):
    - FirebaseCore (= 10.18.0)
  - FirebaseAnalytics (10.18.0):
    - FirebaseCore (~> 10.0)
  - FirebaseCore (10.18.0)
  - Kingfisher (7.10.1)

DEPENDENCIES:
  - Alamofire (~> 5.8)
  - Firebase/Analytics
  - Kingfisher

SPEC REPOS:
  trunk:
    - Alamofire
    - FirebaseAnalytics
    - FirebaseCore
    - Kingfisher

COCOAPODS: 1.14.3
"""


@pytest.fixture
def podfile_lock_text() -> str:
    """A realistic lockfile with sub-specs and shared dependencies."""
    return PODFILE_LOCK


@pytest.fixture
def podfile_lock(tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the sample lockfile to a temporary project directory."""
    path = tmp_path / "Podfile.lock"
    path.write_text(PODFILE_LOCK, encoding="utf-8")
    return path
