# Copyright 2014 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).


class ConfigOption(object):
  """Registry of signing .ini options.

  Options are created in code, typically scoped as close to their use as possible. ::

     flag_property = ConfigOption.create(
       section='android-signing',
       option='flag_property',
       help='Project property that opts a build into reading key.properties.',
       default='key.properties')

  Read an option from a loaded ``Config`` with ::

     name = config.get_option(flag_property)

  Please note `configparser <https://docs.python.org/3/library/configparser.html>`_
  is used to retrieve options, so variable interpolation and the default section
  are used as defined in the configparser docs.
  """

  class Option(object):
    """A signing .ini option."""
    def __init__(self, section, option, help, valtype, default):
      """Do not instantiate directly - use ConfigOption.create."""
      self.section = section
      self.option = option
      self.help = help
      self.valtype = valtype
      self.default = default

    def __hash__(self):
      return hash((self.section, self.option))

    def __eq__(self, other):
      if not isinstance(other, ConfigOption.Option):
        return False
      return self.section == other.section and self.option == other.option

    def __repr__(self):
      return '{0}({1}.{2})'.format(self.__class__.__name__, self.section, self.option)

  _CONFIG_OPTIONS = set()

  # The value types configparser knows how to convert.
  VALTYPES = (str, int, float, bool)

  @classmethod
  def all(cls):
    return cls._CONFIG_OPTIONS

  @classmethod
  def create(cls, section, option, help, valtype=str, default=None):
    """Create a new signing .ini option.

    :param section: Name of section to retrieve option from.
    :param option: Name of option to retrieve from section.
    :param help: Description for display in the configuration reference.
    :param valtype: Type to cast the retrieved option to, one of ``ConfigOption.VALTYPES``.
    :param default: Default value if undefined in the config.
    :returns: An ``Option`` suitable for use with ``Config.get_option``.
    :raises: ``ValueError`` if the option already exists or the valtype is not supported.
    """
    if valtype not in cls.VALTYPES:
      raise ValueError('Option {0}.{1} has unsupported type {2}.'.format(section, option, valtype))
    new_opt = cls.Option(section=section,
                         option=option,
                         help=help,
                         valtype=valtype,
                         default=default)
    if new_opt in cls._CONFIG_OPTIONS:
      raise ValueError('Option {0}.{1} already exists.'.format(section, option))
    cls._CONFIG_OPTIONS.add(new_opt)
    return new_opt
