# Copyright 2014 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import logging
import os
import sys

from release_signing.base.exceptions import ConfigurationError
from release_signing.config.properties_parser import PropertiesParser


logger = logging.getLogger(__name__)

# Gradle exposes environment variables with this prefix as project properties.
# E.g., ORG_GRADLE_PROJECT_foo=bar is the same as -Pfoo=bar.
ENV_PREFIX = 'ORG_GRADLE_PROJECT_'

_SHORT_FLAG = '-P'
_LONG_FLAG = '--project-prop'


class ProjectPropertyError(ConfigurationError):
  pass


class ProjectProperties(object):
  """The project properties of a single build invocation.

  These are the properties a build script sees through project.hasProperty(). Sources are layered
  the way Gradle layers them: gradle.properties files, then the environment, then the command line.
  """

  @classmethod
  def load(cls, args=None, environ=None, properties_files=()):
    """Collect the project properties from every source.

    :param args: Command-line args, as accepted by ``ProjectPropertyParser.parse``.
    :param dict environ: The environment to read, os.environ if None.
    :param properties_files: Paths to gradle.properties files, lowest precedence first.
      Files that do not exist are skipped.
    """
    properties = cls()
    parser = PropertiesParser()
    for path in properties_files:
      if not os.path.isfile(path):
        logger.debug('Skipping missing properties file {0}'.format(path))
        continue
      properties.update(parser.parse_file(path))

    if environ is None:
      environ = os.environ
    properties.update((name[len(ENV_PREFIX):], value) for name, value in environ.items()
                      if name.startswith(ENV_PREFIX) and len(name) > len(ENV_PREFIX))

    properties.update(ProjectPropertyParser().parse(args))
    return properties

  def __init__(self, properties=None):
    self._properties = dict(properties or {})

  def update(self, properties):
    self._properties.update(properties)

  def has_property(self, name):
    return name in self._properties

  def get(self, name, default=None):
    return self._properties.get(name, default)

  def __contains__(self, name):
    return self.has_property(name)

  def __repr__(self):
    # Values are left out since project properties routinely carry credentials.
    return '{0}({1})'.format(self.__class__.__name__, sorted(self._properties))


class ProjectPropertyParser(object):
  """Parses the -P project properties out of a build command line."""

  def parse(self, args_to_parse=None):
    """Parse the args_to_parse, which may be:

    - None, in which case we use sys.argv.
    - An iterable of strings.
    - A single string, which we split on whitespace.

    In all cases the first arg is assumed to be the name of the binary, and is ignored.
    Everything that is not a project property flag is ignored too.
    """
    # Accumulate the result here.
    result = {}

    # Figure out what we're parsing.
    if args_to_parse is None:
      args = sys.argv
    elif isinstance(args_to_parse, str):
      args = args_to_parse.split()
    else:
      args = args_to_parse

    args_iter = iter(args)
    # Skip the first arg, which we assume to be the name of the binary.
    next(args_iter, None)

    for arg in args_iter:
      if arg in (_SHORT_FLAG, _LONG_FLAG):  # The property is the next arg.
        definition = next(args_iter, None)
        if definition is None or definition.startswith('-'):
          raise ProjectPropertyError('{0} must be followed by a property name.'.format(arg))
      elif arg.startswith(_LONG_FLAG + '='):
        definition = arg[len(_LONG_FLAG) + 1:]
      elif arg.startswith(_SHORT_FLAG):
        definition = arg[len(_SHORT_FLAG):]
      else:
        continue

      name, _, value = definition.partition('=')
      if not name:
        raise ProjectPropertyError('{0} is not a valid project property.'.format(arg))
      result[name] = value

    return result
