# Copyright 2014 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import os
import shutil
import tempfile
from contextlib import contextmanager


@contextmanager
def temporary_dir(root_dir=None, cleanup=True):
  """A with-context that creates a temporary directory.

  :param string root_dir: The parent directory to create the temporary directory.
  :param bool cleanup: Whether or not to clean up the temporary directory.
  """
  path = tempfile.mkdtemp(dir=root_dir)
  try:
    yield path
  finally:
    if cleanup:
      shutil.rmtree(path, ignore_errors=True)


@contextmanager
def temporary_file(root_dir=None, cleanup=True, suffix='', mode='w+', encoding='iso-8859-1'):
  """A with-context that creates a temporary file and returns a writeable file descriptor to it.

  You may specify the following keyword args:
  :param string root_dir: The parent directory to create the temporary file.
  :param bool cleanup: Whether or not to clean up the temporary file.
  :param string suffix: If suffix is specified, the file name will end with that suffix.
  :param string mode: The mode to open the file with, text by default.
  :param string encoding: The text encoding, matching how .properties files are read.
  """
  if 'b' in mode:
    encoding = None
  with tempfile.NamedTemporaryFile(suffix=suffix, dir=root_dir, delete=False, mode=mode,
                                   encoding=encoding) as fd:
    try:
      yield fd
    finally:
      if cleanup and os.path.exists(fd.name):
        os.unlink(fd.name)


@contextmanager
def environment_as(**kwargs):
  """Update the environment to the supplied values, restoring the old values on exit.

  A value of None removes the variable.
  """
  old_environment = {}

  def setenv(key, val):
    if val is not None:
      os.environ[key] = val
    elif key in os.environ:
      del os.environ[key]

  for key, val in kwargs.items():
    old_environment[key] = os.environ.get(key)
    setenv(key, val)
  try:
    yield
  finally:
    for key, val in old_environment.items():
      setenv(key, val)


@contextmanager
def pushd(directory):
  """Temporarily change the working directory."""
  cwd = os.getcwd()
  os.chdir(directory)
  try:
    yield directory
  finally:
    os.chdir(cwd)
