# Copyright 2015 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import os


# A Flutter project root always carries this file next to its android/ directory.
_BUILDROOT_MARKER = 'pubspec.yaml'


def get_buildroot():
  """Return the root directory of the project being built.

  The BUILDROOT environment variable wins. Otherwise the closest directory at or above the
  working directory that holds a pubspec.yaml, falling back to the working directory itself.
  """
  buildroot = os.environ.get('BUILDROOT')
  if buildroot:
    return os.path.realpath(buildroot)

  cwd = os.path.realpath(os.getcwd())
  candidate = cwd
  while True:
    if os.path.isfile(os.path.join(candidate, _BUILDROOT_MARKER)):
      return candidate
    parent = os.path.dirname(candidate)
    if parent == candidate:
      return cwd
    candidate = parent
