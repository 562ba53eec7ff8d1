# Copyright 2014 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import logging
import os
from configparser import ConfigParser, Error as ConfigParserError

from release_signing.base.build_environment import get_buildroot
from release_signing.base.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class Config(object):
  """Typed access to the options of one or more .ini files.

  Files are read in order and later files override earlier ones. ``%(homedir)s`` and
  ``%(buildroot)s`` are available for interpolation in every section.
  """

  @classmethod
  def create_parser(cls, seed_values=None):
    """Create a ConfigParser seeded with the interpolation defaults."""
    defaults = {'homedir': os.path.expanduser('~'), 'buildroot': get_buildroot()}
    if seed_values:
      defaults.update(seed_values)
    return ConfigParser(defaults=defaults)

  @classmethod
  def load(cls, configpaths=(), seed_values=None):
    """Load the given .ini files, skipping any that do not exist.

    :raises: ``ConfigurationError`` if a file exists but is not valid .ini.
    """
    parser = cls.create_parser(seed_values)
    for configpath in configpaths:
      if not os.path.isfile(configpath):
        logger.debug('No config file at {0}'.format(configpath))
        continue
      try:
        with open(configpath, 'r') as ini:
          parser.read_file(ini, source=configpath)
      except ConfigParserError as e:
        raise ConfigurationError('Invalid config file {0}: {1}'.format(configpath, e),
                                 path=configpath)
    return cls(parser)

  def __init__(self, parser=None):
    self._parser = parser if parser is not None else self.create_parser()

  def has_option(self, option):
    return self._parser.has_option(option.section, option.option)

  def get_option(self, option):
    """Return the value of a ``ConfigOption.Option``, cast to its valtype.

    :raises: ``ConfigurationError`` if the value cannot be converted.
    """
    if not self.has_option(option):
      return option.default
    getters = {
      bool: self._parser.getboolean,
      int: self._parser.getint,
      float: self._parser.getfloat,
    }
    getter = getters.get(option.valtype, self._parser.get)
    try:
      return getter(option.section, option.option)
    except (ValueError, ConfigParserError) as e:
      raise ConfigurationError('Bad value for {0}.{1}: {2}'.format(option.section, option.option, e),
                               key=option.option)
