# Copyright 2015 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import logging
import os

from release_signing.android.keystore.keystore import SigningProperties
from release_signing.base.exceptions import ConfigurationError
from release_signing.config.properties_parser import PropertiesParseError, PropertiesParser


logger = logging.getLogger(__name__)


class KeyResolver(object):
  """Read a key.properties file and build the release SigningProperties from it."""

  Error = ConfigurationError

  # Property name in key.properties -> SigningProperties field, in the order they are reported.
  REQUIRED_KEYS = (
    ('storeFile', 'store_file_path'),
    ('storePassword', 'store_password'),
    ('keyAlias', 'key_alias'),
    ('keyPassword', 'key_password'),
  )

  @classmethod
  def resolve(cls, flag_present, properties_file):
    """Return the SigningProperties in properties_file, or None if the build did not ask for them.

    None means the caller should fall back to its own identity. That happens when flag_present is
    False or when there is no file at properties_file.

    :param bool flag_present: Whether the build opted into reading the properties file.
    :param string properties_file: path/to/key.properties.
    :raises: ``KeyResolver.Error`` if the file exists but cannot be read, cannot be parsed or is
      missing a required key.
    """
    if not flag_present:
      logger.debug('Signing flag not set, skipping {0}'.format(properties_file))
      return None
    if not os.path.exists(properties_file):
      logger.debug('No signing properties at {0}'.format(properties_file))
      return None

    try:
      properties = PropertiesParser().parse_file(properties_file)
    except PropertiesParseError as e:
      raise cls.Error('Malformed signing property {0} in {1}: {2}'
                      .format(e.key, properties_file, e),
                      key=e.key,
                      path=properties_file)
    except (OSError, UnicodeError) as e:
      raise cls.Error('Unable to read signing properties at {0}: {1}'.format(properties_file, e),
                      path=properties_file)

    # Blank values count as missing, an empty password or alias can never sign anything.
    missing = [key for key, _ in cls.REQUIRED_KEYS if not properties.get(key, '').strip()]
    if missing:
      raise cls.Error('Signing properties at {0} are missing required key(s): {1}'
                      .format(properties_file, ', '.join(missing)),
                      key=missing[0],
                      path=properties_file)

    logger.info('Loaded signing properties for key alias {0} from {1}'
                .format(properties['keyAlias'], properties_file))
    return SigningProperties(**{field: properties[key] for key, field in cls.REQUIRED_KEYS})
