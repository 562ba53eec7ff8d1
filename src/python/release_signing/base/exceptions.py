# Copyright 2015 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).


class ConfigurationError(Exception):
  """Indicate a signing configuration that was supplied but cannot be used.

  :param string message: A description of the problem.
  :param string key: The property that is missing or malformed, if there is one.
  :param string path: The file the problem was found in, if there is one.
  """

  def __init__(self, message, key=None, path=None):
    super(ConfigurationError, self).__init__(message)
    self.key = key
    self.path = path
