# Copyright 2015 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import os
from collections import namedtuple


DEFAULT_DEBUG_KEYSTORE = os.path.join('~', '.android', 'debug.keystore')


class SigningProperties(namedtuple('SigningProperties', ['store_file_path',
                                                         'store_password',
                                                         'key_alias',
                                                         'key_password'])):
  """The credentials that sign a build.

  :param string store_file_path: path/to/keystore, exactly as it was configured.
  :param string store_password: The password for the keystore.
  :param string key_alias: The alias of the signing key inside the keystore.
  :param string key_password: The password for the key.
  """

  __slots__ = ()

  @classmethod
  def debug(cls, location=DEFAULT_DEBUG_KEYSTORE):
    """Return the identity the Android tools generate for debug builds."""
    return cls(store_file_path=location,
               store_password='android',
               key_alias='androiddebugkey',
               key_password='android')

  def store_file(self, base_dir):
    """Return the absolute path of the keystore.

    ``~`` and environment variables are expanded and relative paths are taken relative to base_dir.
    """
    location = os.path.expandvars(os.path.expanduser(self.store_file_path))
    return os.path.normpath(os.path.join(base_dir, location))

  def __repr__(self):
    return ('{0}(store_file_path={1!r}, store_password=\'***\', key_alias={2!r}, '
            'key_password=\'***\')'.format(self.__class__.__name__,
                                           self.store_file_path,
                                           self.key_alias))

  __str__ = __repr__
