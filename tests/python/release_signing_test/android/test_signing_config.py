# Copyright 2015 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import os
import textwrap
import unittest
from contextlib import contextmanager

from release_signing.android.keystore.keystore import SigningProperties
from release_signing.android.keystore.signing_config import SigningConfig
from release_signing.base.exceptions import ConfigurationError
from release_signing.config.config import Config
from release_signing.config.project_properties import ProjectProperties
from release_signing.util.contextutil import temporary_dir


class SigningConfigTest(unittest.TestCase):
  """Test picking the signing identity for each build type."""

  @contextmanager
  def flutter_project(self, key_properties=None, ini=None):
    """Represent a Flutter project root, with an optional android/key.properties."""
    with temporary_dir() as buildroot:
      os.makedirs(os.path.join(buildroot, 'android', 'app'))
      if key_properties is not None:
        with open(os.path.join(buildroot, 'android', 'key.properties'), 'w') as fp:
          fp.write(textwrap.dedent(key_properties))
      configpaths = []
      if ini is not None:
        configpath = os.path.join(buildroot, 'signing.ini')
        with open(configpath, 'w') as fp:
          fp.write(textwrap.dedent(ini))
        configpaths.append(configpath)
      yield buildroot, Config.load(configpaths)

  _KEY_PROPERTIES = """
    storeFile=upload-keystore.jks
    storePassword=abc123
    keyAlias=upload
    keyPassword=xyz789
    """

  def signing_config(self, buildroot, config, args='gradlew assembleRelease -Pkey.properties'):
    return SigningConfig(config, ProjectProperties.load(args=args, environ={}), buildroot=buildroot)

  def test_release(self):
    with self.flutter_project(key_properties=self._KEY_PROPERTIES) as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      release = signing.for_build_type('release')
      self.assertEqual(SigningProperties('upload-keystore.jks', 'abc123', 'upload', 'xyz789'),
                       release)
      self.assertEqual(os.path.join(buildroot, 'android', 'app', 'upload-keystore.jks'),
                       signing.store_file_for('release'))

  def test_debug(self):
    with self.flutter_project(key_properties=self._KEY_PROPERTIES) as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      self.assertEqual(SigningProperties.debug(), signing.for_build_type('debug'))

  def test_release_falls_back_without_flag(self):
    with self.flutter_project(key_properties=self._KEY_PROPERTIES) as (buildroot, config):
      signing = self.signing_config(buildroot, config, args='gradlew assembleRelease')
      self.assertIsNone(signing.release_properties)
      self.assertEqual(SigningProperties.debug(), signing.for_build_type('release'))

  def test_release_falls_back_without_file(self):
    with self.flutter_project() as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      with self.assertLogs('release_signing.android.keystore.signing_config', 'WARNING'):
        self.assertEqual(SigningProperties.debug(), signing.for_build_type('release'))

  def test_fallback_disabled(self):
    ini = """
      [android-signing]
      allow_debug_fallback: false
      """
    with self.flutter_project(ini=ini) as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      with self.assertRaises(ConfigurationError) as cm:
        signing.for_build_type('release')
      self.assertEqual(os.path.join(buildroot, 'android', 'key.properties'), cm.exception.path)

  def test_broken_file_is_fatal(self):
    with self.flutter_project(key_properties='storeFile=upload.jks\n') as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      with self.assertRaises(ConfigurationError):
        signing.for_build_type('release')

  def test_unknown_build_type(self):
    with self.flutter_project() as (buildroot, config):
      with self.assertRaises(ValueError):
        self.signing_config(buildroot, config).for_build_type('profile')

  def test_configured_options(self):
    ini = """
      [android-signing]
      flag_property: sign
      properties_file: secrets/release.properties
      store_file_base: secrets
      debug_keystore: %(homedir)s/debug.keystore
      """
    with self.flutter_project(ini=ini) as (buildroot, config):
      os.makedirs(os.path.join(buildroot, 'secrets'))
      with open(os.path.join(buildroot, 'secrets', 'release.properties'), 'w') as fp:
        fp.write(textwrap.dedent(self._KEY_PROPERTIES))

      unflagged = self.signing_config(buildroot, config)
      self.assertEqual(os.path.join(os.path.expanduser('~'), 'debug.keystore'),
                       unflagged.for_build_type('release').store_file_path)

      signing = self.signing_config(buildroot, config, args='gradlew -Psign')
      release = signing.for_build_type('release')
      self.assertEqual('upload', release.key_alias)
      self.assertEqual(os.path.join(buildroot, 'secrets', 'upload-keystore.jks'),
                       signing.store_file_for('release'))

  def test_release_resolved_once(self):
    with self.flutter_project(key_properties=self._KEY_PROPERTIES) as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      first = signing.release_properties
      os.unlink(os.path.join(buildroot, 'android', 'key.properties'))
      self.assertIs(first, signing.release_properties)

  def test_build_type_case(self):
    with self.flutter_project(key_properties=self._KEY_PROPERTIES) as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      self.assertEqual('upload', signing.for_build_type('Release').key_alias)
      self.assertEqual(SigningProperties.debug(), signing.for_build_type('DEBUG'))

  def test_release_with_debug_values(self):
    key_properties = """
      storeFile=debug.keystore
      storePassword=android
      keyAlias=androiddebugkey
      keyPassword=android
      """
    ini = """
      [android-signing]
      debug_keystore: debug.keystore
      """
    with self.flutter_project(key_properties=key_properties, ini=ini) as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      self.assertEqual(signing.debug_properties, signing.for_build_type('release'))
      self.assertEqual(os.path.join(buildroot, 'android', 'app', 'debug.keystore'),
                       signing.store_file_for('release'))
      self.assertEqual(os.path.join(buildroot, 'debug.keystore'), signing.store_file_for('debug'))

  def test_release_fallback_store_file(self):
    ini = """
      [android-signing]
      debug_keystore: keys/debug.keystore
      """
    with self.flutter_project(ini=ini) as (buildroot, config):
      signing = self.signing_config(buildroot, config)
      self.assertEqual(os.path.join(buildroot, 'keys', 'debug.keystore'),
                       signing.store_file_for('release'))
