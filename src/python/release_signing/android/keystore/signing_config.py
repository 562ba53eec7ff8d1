# Copyright 2015 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import logging
import os

from release_signing.android.keystore.key_resolver import KeyResolver
from release_signing.android.keystore.keystore import DEFAULT_DEBUG_KEYSTORE, SigningProperties
from release_signing.base.build_environment import get_buildroot
from release_signing.base.exceptions import ConfigurationError
from release_signing.config.config_option import ConfigOption


logger = logging.getLogger(__name__)

_CONFIG_SECTION = 'android-signing'

FLAG_PROPERTY = ConfigOption.create(
  section=_CONFIG_SECTION,
  option='flag_property',
  help='Project property that opts a build into reading the signing properties file.',
  default='key.properties')

PROPERTIES_FILE = ConfigOption.create(
  section=_CONFIG_SECTION,
  option='properties_file',
  help='Path to the signing properties file, relative to the build root.',
  default=os.path.join('android', 'key.properties'))

STORE_FILE_BASE = ConfigOption.create(
  section=_CONFIG_SECTION,
  option='store_file_base',
  help='Directory, relative to the build root, that a relative storeFile is resolved against.',
  default=os.path.join('android', 'app'))

DEBUG_KEYSTORE = ConfigOption.create(
  section=_CONFIG_SECTION,
  option='debug_keystore',
  help='Location of the keystore used for debug builds.',
  default=DEFAULT_DEBUG_KEYSTORE)

ALLOW_DEBUG_FALLBACK = ConfigOption.create(
  section=_CONFIG_SECTION,
  option='allow_debug_fallback',
  help='Sign release builds with the debug keystore when no release identity is configured.',
  valtype=bool,
  default=True)


class SigningConfig(object):
  """Pick the SigningProperties for each build type of an Android application."""

  BUILD_TYPES = ('debug', 'release')

  def __init__(self, config, project_properties, buildroot=None):
    """
    :param config: A ``Config`` holding the android-signing options.
    :param project_properties: The ``ProjectProperties`` of this build invocation.
    :param string buildroot: The project root, found with get_buildroot() if None.
    """
    self._config = config
    self._project_properties = project_properties
    self._buildroot = buildroot or get_buildroot()
    self._release_properties = None
    self._release_resolved = False

  def _path(self, option):
    return os.path.join(self._buildroot, self._config.get_option(option))

  @property
  def properties_file(self):
    return self._path(PROPERTIES_FILE)

  @property
  def debug_properties(self):
    return SigningProperties.debug(self._config.get_option(DEBUG_KEYSTORE))

  @property
  def release_properties(self):
    """The release identity from the signing properties file, or None if there is none."""
    if not self._release_resolved:
      flag = self._config.get_option(FLAG_PROPERTY)
      self._release_properties = KeyResolver.resolve(self._project_properties.has_property(flag),
                                                     self.properties_file)
      self._release_resolved = True
    return self._release_properties

  def for_build_type(self, build_type):
    """Return the SigningProperties to sign build_type with.

    :raises: ``ValueError`` for an unknown build type, ``ConfigurationError`` for a release build
      with no release identity when debug fallback is disabled.
    """
    build_type = build_type.lower()
    if build_type not in self.BUILD_TYPES:
      raise ValueError("The 'build_type' must be one of (debug, release) instead of: '{0}'."
                       .format(build_type))
    if build_type == 'debug':
      return self.debug_properties

    if self.release_properties is not None:
      return self.release_properties
    if not self._config.get_option(ALLOW_DEBUG_FALLBACK):
      raise ConfigurationError('No release signing identity: set -P{0} and provide {1}.'
                               .format(self._config.get_option(FLAG_PROPERTY), self.properties_file),
                               path=self.properties_file)
    logger.warning('No release signing identity configured, signing the release build with the '
                   'debug keystore.')
    return self.debug_properties

  def store_file_for(self, build_type):
    """Return the absolute keystore path used to sign build_type.

    A release identity from the signing properties file is taken relative to the store_file_base,
    the debug keystore relative to the build root.
    """
    properties = self.for_build_type(build_type)
    if build_type.lower() == 'release' and self.release_properties is not None:
      return properties.store_file(self._path(STORE_FILE_BASE))
    return properties.store_file(self._buildroot)
